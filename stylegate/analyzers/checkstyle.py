from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Sequence

from stylegate.core.util import executable_available, run_cmd, split_cmd
from stylegate.domain.errors import AnalyzerNotFoundError, AnalyzerTimeoutError
from stylegate.domain.models import AnalysisRequest

from .base import RawToolResult, StaticCodeAnalyzer

logger = logging.getLogger(__name__)


class CheckstyleAnalyzer(StaticCodeAnalyzer):
    """Runs the Checkstyle CLI as a child process.

    Checkstyle exits with the number of violations, so a non-zero exit code is
    not an error; the XML report is what the rest of the pipeline reads.
    """

    def __init__(self, cmd: str | Sequence[str] = "checkstyle", cwd: Path | None = None, timeout_sec: int | None = None):
        self.cmd = split_cmd(cmd)
        self.cwd = cwd or Path.cwd()
        self.timeout_sec = timeout_sec

    def tool_name(self) -> str:
        return "checkstyle"

    def analyze(self, request: AnalysisRequest) -> RawToolResult:
        if not executable_available(self.cmd):
            raise AnalyzerNotFoundError(f"Checkstyle executable not found: {' '.join(self.cmd) or '<empty>'}")

        try:
            r = run_cmd(self.cmd + request.to_args(), cwd=self.cwd, timeout_sec=self.timeout_sec)
        except subprocess.TimeoutExpired as e:
            raise AnalyzerTimeoutError(f"Checkstyle did not finish within {e.timeout} seconds") from e

        if r.stderr.strip():
            logger.debug("checkstyle stderr: %s", r.stderr.strip())

        return RawToolResult(
            tool="checkstyle",
            exit_code=r.exit_code,
            stdout=r.stdout,
            stderr=r.stderr,
            artifact=request.output_file.name,
        )
