from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from stylegate.core.containers import build_checkstyle_service
from stylegate.domain.errors import CheckstyleGateError, ReportUnreadableError, StylegateError
from stylegate.domain.models import BuildContext

router = APIRouter(prefix="/api/checkstyle", tags=["checkstyle"])


# ── Request / Response schemas ────────────────────────────────────
class RunResponse(BaseModel):
    """Where a Checkstyle run left its report."""

    context: BuildContext
    report: str = Field(..., description="Absolute path of the XML report.")
    transformations: list[str] = Field(
        default_factory=list,
        description="Outputs of the configured XSLT rules, if any.",
    )


class CheckResponse(BaseModel):
    """Outcome of a passing `checkstyle-check`."""

    context: BuildContext
    report: str
    issues_found: int
    summary: list[str]


class ReportResponse(BaseModel):
    """Parsed Checkstyle report."""

    context: BuildContext
    count: int
    files: list[dict[str, Any]]


# ── Endpoints ─────────────────────────────────────────────────────
@router.post(
    "/{context}",
    response_model=RunResponse,
    summary="Run Checkstyle",
    response_description="Report location; findings never fail this call",
)
def run_checkstyle(context: BuildContext) -> dict[str, Any]:
    """Run Checkstyle on the sources of one build context (`compile` or `test`)
    and apply the configured XSLT rules to its report."""
    service = build_checkstyle_service()
    try:
        request = service.run(context)
    except StylegateError as e:
        raise HTTPException(status_code=500, detail=str(e))

    rules = service.project.for_context(context).rules() or frozenset()
    return {
        "context": context,
        "report": str(request.output_file.absolute()),
        "transformations": sorted(str(r.output) for r in rules),
    }


@router.post(
    "/{context}/check",
    response_model=CheckResponse,
    summary="Run Checkstyle and fail on findings",
    response_description="Passing gate result",
    responses={422: {"description": "Findings matched the failing severity levels"}},
)
def check_checkstyle(context: BuildContext) -> Any:
    """Run Checkstyle, then fail with **422** when findings match the
    configured severity levels (default `warning` and `error`)."""
    service = build_checkstyle_service()
    try:
        result = service.run_and_check(context)
    except CheckstyleGateError as e:
        return JSONResponse(
            status_code=422,
            content={
                "detail": str(e),
                "issues_found": e.issues_found,
                "report": str(e.report_path),
                "summary": e.summary_lines,
            },
        )
    except StylegateError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return {
        "context": context,
        "report": str(service.request_for(context).output_file.absolute()),
        "issues_found": result.issues_found,
        "summary": result.summary_lines,
    }


@router.get(
    "/{context}/report",
    response_model=ReportResponse,
    summary="Get last report",
    response_description="Findings grouped by file, in document order",
)
def get_report(context: BuildContext) -> dict[str, Any]:
    """Parse the report left by the last run without re-running Checkstyle."""
    try:
        report = build_checkstyle_service().report(context)
    except ReportUnreadableError:
        raise HTTPException(status_code=404, detail="No readable Checkstyle report yet")

    data = report.to_dict()
    return {
        "context": context,
        "count": sum(1 for _ in report.findings()),
        "files": data["files"],
    }
