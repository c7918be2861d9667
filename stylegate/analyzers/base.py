from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass

from stylegate.domain.models import AnalysisRequest

@dataclass
class RawToolResult:
    tool: str
    exit_code: int
    stdout: str
    stderr: str
    artifact: str | None = None

class StaticCodeAnalyzer(ABC):
    """Writes a Checkstyle XML report to ``request.output_file``."""

    @abstractmethod
    def tool_name(self) -> str: ...

    @abstractmethod
    def analyze(self, request: AnalysisRequest) -> RawToolResult: ...
