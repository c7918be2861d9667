from __future__ import annotations

from pathlib import Path


class StylegateError(RuntimeError):
    """Base class for every failure the pipeline lets propagate."""


class AnalyzerNotFoundError(StylegateError):
    pass


class AnalyzerTimeoutError(StylegateError):
    pass


class TransformationError(StylegateError):
    pass


class ReportUnreadableError(StylegateError):
    pass


class CheckstyleGateError(StylegateError):
    """Findings matched the failing severity set.

    Raised only after every matching finding has been logged.
    """

    def __init__(self, issues_found: int, report_path: Path, summary_lines: list[str] | None = None):
        self.issues_found = issues_found
        self.report_path = report_path
        self.summary_lines = list(summary_lines or [])
        super().__init__(f"{issues_found} issue(s) found in Checkstyle report: {report_path}")
