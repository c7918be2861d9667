from __future__ import annotations

from pathlib import Path

from stylegate.analyzers.base import StaticCodeAnalyzer
from stylegate.analyzers.checkstyle import CheckstyleAnalyzer
from stylegate.analyzers.inprocess import InProcessAnalyzer
from stylegate.core.config import load_project_config, settings
from stylegate.services.checkstyle_service import CheckstyleService


def build_analyzer() -> StaticCodeAnalyzer:
    """Pick the analyzer from settings.

    ``CHECKSTYLE_ENTRY_POINT`` (``module:function``) selects an in-process
    analyzer; otherwise ``CHECKSTYLE_CMD`` runs as a subprocess.
    """
    if settings.CHECKSTYLE_ENTRY_POINT:
        return InProcessAnalyzer(settings.CHECKSTYLE_ENTRY_POINT)
    return CheckstyleAnalyzer(
        settings.CHECKSTYLE_CMD,
        cwd=settings.base_dir(),
        timeout_sec=settings.CHECKSTYLE_TIMEOUT,
    )


def build_checkstyle_service(config_path: Path | None = None) -> CheckstyleService:
    return CheckstyleService(build_analyzer(), load_project_config(config_path))
