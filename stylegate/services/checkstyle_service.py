from __future__ import annotations

import logging

from stylegate.analyzers.base import StaticCodeAnalyzer
from stylegate.analyzers.guard import run_isolated
from stylegate.domain.errors import CheckstyleGateError
from stylegate.domain.models import AnalysisRequest, BuildContext, GateResult, Report
from stylegate.domain.schemas import ProjectConfig
from stylegate.reports.gate import evaluate
from stylegate.reports.parser import load_report
from stylegate.reports.transform import apply_xslt

logger = logging.getLogger(__name__)


class CheckstyleService:
    """
    Orchestrates, per build context: analyzer (guarded) → XSLT rules → optional severity gate.
    """

    def __init__(self, analyzer: StaticCodeAnalyzer, project: ProjectConfig):
        self.analyzer = analyzer
        self.project = project

    def request_for(self, context: BuildContext | str) -> AnalysisRequest:
        cfg = self.project.for_context(context)
        return AnalysisRequest(
            source_dir=cfg.source_dir,
            config_file=cfg.config_file,
            output_file=cfg.output_file,
        )

    def run(self, context: BuildContext | str) -> AnalysisRequest:
        context = BuildContext(context)
        cfg = self.project.for_context(context)
        request = self.request_for(context)
        extra = {"build_context": context.value}

        request.output_file.parent.mkdir(parents=True, exist_ok=True)

        logger.info("Running %s on %s ...", self.analyzer.tool_name(), request.source_dir, extra=extra)
        # in-process analyzers may try to exit the interpreter when done
        raw = run_isolated(self.analyzer.analyze, request)
        if raw is not None:
            logger.info("%s finished with exit code %d", raw.tool, raw.exit_code, extra=extra)

        rules = cfg.rules()
        if rules:
            written = apply_xslt(request.output_file, rules)
            logger.info("Applied %d XSLT transformation(s)", len(written), extra=extra)

        return request

    def run_and_check(self, context: BuildContext | str) -> GateResult:
        context = BuildContext(context)
        cfg = self.project.for_context(context)
        request = self.run(context)
        extra = {"build_context": context.value}

        logger.info("Will fail the build if errors are found in Checkstyle's XML report.", extra=extra)
        report = load_report(request.output_file)
        result = evaluate(report, cfg.severity_levels)

        for line in result.summary_lines:
            logger.warning("%s", line, extra=extra)

        if result.failed:
            raise CheckstyleGateError(result.issues_found, request.output_file.absolute(), result.summary_lines)

        return result

    def report(self, context: BuildContext | str) -> Report:
        return load_report(self.request_for(context).output_file)
