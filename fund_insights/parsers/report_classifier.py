"""Fingerprint matcher that tells the supported report layouts apart.

Pure text in, verdict out: no I/O and no parsing. The registry
(parsers/registry.py) builds one FingerprintSpec per registered report type.
"""

from dataclasses import dataclass
from typing import Sequence

from fund_insights.pydantic_models.reports import ReportIdentification


@dataclass(frozen=True)
class FingerprintSpec:
    """Identification rule for one report type.

    Attributes:
        report_type: Registry key, e.g. "performance".
        name: Human-readable report name.
        fingerprints: Case-insensitive substrings looked for in the text.
        min_match_count: Matches required before the type is eligible.
    """

    report_type: str
    name: str
    fingerprints: tuple[str, ...]
    min_match_count: int = 1


class ReportClassifier:
    """Scores a document against each spec and keeps the best eligible one.

    confidence = matched fingerprints / total fingerprints * 100.

    Tie-break: a later spec replaces the current best only with a strictly
    higher confidence, so on equal confidence the spec registered first
    wins. Results therefore depend on registration order.
    """

    def __init__(self, specs: Sequence[FingerprintSpec]):
        self.specs = tuple(specs)

    def score(self, spec: FingerprintSpec, text: str) -> ReportIdentification:
        """Score a single spec against already lower-cased text."""
        match_count = sum(1 for fp in spec.fingerprints if fp.lower() in text)
        total = len(spec.fingerprints)
        confidence = (match_count / total) * 100 if total else 0.0
        return ReportIdentification(
            type=spec.report_type,
            confidence=confidence,
            name=spec.name,
            match_count=match_count,
            total_fingerprints=total,
        )

    def identify(self, text: str) -> ReportIdentification | None:
        """Identify the report type of a document.

        Args:
            text: Full document text (any case).

        Returns:
            The best eligible identification, or None if no spec reached its
            minimum match count.
        """
        normalized = (text or "").lower()

        best: ReportIdentification | None = None
        for spec in self.specs:
            candidate = self.score(spec, normalized)
            if candidate.match_count < spec.min_match_count:
                continue
            if best is None or candidate.confidence > best.confidence:
                best = candidate

        return best
