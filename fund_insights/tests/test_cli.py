"""Tests for fund_insights.cli.analyze.

PDF reading is patched out; the fixture documents stand in for the files.
"""

import json
from unittest.mock import patch

import pytest

from fund_insights.cli import analyze


@pytest.fixture
def pdf_files(tmp_path, allocation_document, performance_document, make_document):
    """Placeholder files on disk and the documents read_pdf returns for them."""
    documents = {
        "allocation.pdf": allocation_document,
        "performance.pdf": performance_document,
        "newsletter.pdf": make_document(["Quarterly newsletter " * 10], source_name="newsletter.pdf"),
    }
    paths = {}
    for name in documents:
        path = tmp_path / name
        path.write_bytes(b"%PDF-1.4")
        paths[name] = str(path)

    def fake_read_pdf(path):
        return documents[path.name]

    with patch("fund_insights.cli.read_pdf", side_effect=fake_read_pdf):
        yield paths


class TestAnalyze:
    """Tests for the analyze() entrypoint."""

    def test_writes_export(self, pdf_files, tmp_path):
        out = tmp_path / "out"
        result = analyze([pdf_files["allocation.pdf"], pdf_files["performance.pdf"]], output_dir=out)

        assert result["fund"]["analysis_status"] == "complete"
        assert result["summary"]["classification"] == "balanced"
        assert result["validation"]["valid"]

        exports = list(out.glob("fund-analysis-*.json"))
        assert len(exports) == 1
        with open(exports[0]) as f:
            data = json.load(f)
        assert data["fund"]["fund_id"] == result["fund"]["fund_id"]
        assert data["fund"]["performance_score"] == 82

    def test_summary_only(self, pdf_files, tmp_path):
        out = tmp_path / "out"
        result = analyze([pdf_files["performance.pdf"]], output_dir=out, summary_only=True)

        assert result["fund"]["analysis_status"] == "partial"
        assert not out.exists()

    def test_missing_file(self, tmp_path, capsys):
        assert analyze([str(tmp_path / "missing.pdf")], output_dir=tmp_path) is None
        assert "File not found" in capsys.readouterr().out

    def test_unrecognized_report_skipped(self, pdf_files, tmp_path, capsys):
        result = analyze(
            [pdf_files["newsletter.pdf"], pdf_files["allocation.pdf"]],
            output_dir=tmp_path,
            summary_only=True,
        )

        assert "[ERROR] newsletter.pdf" in capsys.readouterr().out
        assert result["fund"]["analysis_status"] == "partial"
        assert result["errors"]["summary"]["total_errors"] == 1

    def test_nothing_processed(self, pdf_files, tmp_path):
        assert analyze([pdf_files["newsletter.pdf"]], output_dir=tmp_path) is None

    def test_log_file_reported(self, pdf_files, tmp_path, capsys):
        log_dir = tmp_path / "logs"
        with patch("fund_insights.cli.LOG_DIR", log_dir):
            analyze([pdf_files["allocation.pdf"]], output_dir=tmp_path, summary_only=True)

        log_files = list(log_dir.glob("*.log"))
        assert len(log_files) == 1
        assert f"[LOG] {log_files[0]}" in capsys.readouterr().out
