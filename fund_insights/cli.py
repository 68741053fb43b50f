"""CLI entrypoint: analyse CLASS Super report PDFs into a fund model."""

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables before config reads them
load_dotenv()

from fund_insights.core.config import LOG_DIR, OUTPUT_DIR  # noqa: E402
from fund_insights.core.errors import ReportProcessingError  # noqa: E402
from fund_insights.core.pdf_reader import read_pdf  # noqa: E402
from fund_insights.core.pipeline_logger import get_logger  # noqa: E402
from fund_insights.engines.fund_model import get_fund_summary  # noqa: E402
from fund_insights.engines.session import FundSession  # noqa: E402
from fund_insights.pydantic_models.fund import FundSummary  # noqa: E402


def print_summary(summary: FundSummary):
    """Print the key figures of a fund."""
    def money(value: float | None) -> str:
        return f"${value:,.2f}" if value is not None else "n/a"

    def pct(value: float | None) -> str:
        return f"{value:.2f}%" if value is not None else "n/a"

    print(f"\n{'='*50}")
    print("Fund summary")
    print(f"{'='*50}")
    print(f"  Total value:     {money(summary.total_value)}")
    print(
        f"  Classification:  {summary.classification} "
        f"(growth {summary.growth_percent:.1f}%, defensive {summary.defensive_percent:.1f}%)"
    )
    print(f"  1-year TWR:      {pct(summary.one_year_return)}")
    print(f"  Dollar return:   {money(summary.dollar_return)}")
    if summary.benchmark_name:
        print(f"  Benchmark:       {summary.benchmark_name} (1y diff {pct(summary.one_year_vs_benchmark)})")
    score = summary.performance_score if summary.performance_score is not None else "n/a"
    print(f"  Score:           {score}")
    print(f"  Asset classes:   {summary.asset_class_count}")
    if summary.as_at_date:
        print(f"  As at:           {summary.as_at_date}")
    if summary.period_start or summary.period_end:
        print(f"  Period:          {summary.period_start} to {summary.period_end}")


def analyze(
    pdf_paths: list[str],
    output_dir: str | Path = OUTPUT_DIR,
    verbose: bool = False,
    summary_only: bool = False,
) -> dict | None:
    """Read each PDF, merge the reports into one fund and export it.

    Args:
        pdf_paths: Report PDFs (allocation and/or performance, any order).
        output_dir: Directory for the fund-analysis-<fund_id>.json file.
        verbose: Verbose output.
        summary_only: Print the summary without writing a file.

    Returns:
        Exported dict, or None when no report could be processed.
    """
    logger = get_logger(verbose=verbose, log_dir=LOG_DIR)
    session = FundSession(logger=logger)
    logger.start_run(Path(pdf_paths[0]).name if len(pdf_paths) == 1 else "fund-analysis")

    processed = 0
    for path in pdf_paths:
        pdf_path = Path(path)
        if not pdf_path.exists():
            print(f"Error: File not found: {pdf_path}")
            continue
        try:
            document = read_pdf(pdf_path)
            session.ingest(document)
            processed += 1
        except ReportProcessingError as e:
            print(f"[ERROR] {pdf_path.name}: {e.error.message}")

    fund = session.fund
    validation = session.validate()
    summary = get_fund_summary(fund)

    logger.end_run(
        success=processed > 0,
        stats={
            "reports": processed,
            "status": fund.analysis_status,
            "errors": session.errors.summary(),
        },
    )
    if logger.log_file:
        print(f"[LOG] {logger.log_file}")

    if processed == 0:
        return None

    print_summary(summary)
    for insight in fund.derived_insights:
        print(f"  * {insight.title}: {insight.description}")
    for warning in validation.warnings:
        print(f"  ! {warning}")

    result = {
        "fund": fund.model_dump(mode="json"),
        "summary": summary.model_dump(mode="json"),
        "validation": validation.model_dump(mode="json"),
        "errors": session.errors.to_dict(),
    }

    if not summary_only:
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        output_file = output_dir / f"fund-analysis-{fund.fund_id}.json"
        with open(output_file, "w") as f:
            json.dump(result, f, indent=2, ensure_ascii=False)
        print(f"\n[OUTPUT] {output_file}")

    return result


def main():
    parser = argparse.ArgumentParser(
        description="CLASS Super Fund Report Analysis",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  fund-insights reports/allocation.pdf reports/movement_and_returns.pdf
  fund-insights --summary-only reports/movement_and_returns.pdf
  fund-insights -o exports -v reports/*.pdf
        """,
    )
    parser.add_argument("pdfs", nargs="+", metavar="pdf", help="Report PDF file(s)")
    parser.add_argument(
        "-o", "--output",
        default=str(OUTPUT_DIR),
        help=f"Output directory (default: {OUTPUT_DIR})",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output with DEBUG level logging",
    )
    parser.add_argument(
        "--summary-only",
        action="store_true",
        help="Print the fund summary without writing the JSON export",
    )

    args = parser.parse_args()

    result = analyze(
        pdf_paths=args.pdfs,
        output_dir=args.output,
        verbose=args.verbose,
        summary_only=args.summary_only,
    )

    sys.exit(0 if result else 1)


if __name__ == "__main__":
    main()
