from __future__ import annotations

from collections.abc import Iterable

from stylegate.domain.models import GateResult, Report


def summary_line(severity: str, file: str, message: str) -> str:
    return f"Checkstyle {severity} found in {file}: {message}"


def evaluate(report: Report, failing_severities: Iterable[str]) -> GateResult:
    """Count findings whose severity is in ``failing_severities``.

    Set membership only; severities are not ordered, so ``{"error"}`` does
    not imply ``warning`` or anything below it.
    """
    failing = frozenset(failing_severities)
    result = GateResult()
    if not failing:
        return result

    for entry in report.files:
        for finding in entry.findings:
            if finding.severity in failing:
                result.issues_found += 1
                result.summary_lines.append(summary_line(finding.severity, entry.name, finding.message))
    return result
