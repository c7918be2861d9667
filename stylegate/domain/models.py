from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Iterator

DEFAULT_SEVERITY_LEVELS: frozenset[str] = frozenset({"warning", "error"})


class BuildContext(str, Enum):
    COMPILE = "compile"
    TEST = "test"


@dataclass(frozen=True)
class AnalysisRequest:
    source_dir: Path
    config_file: Path
    output_file: Path
    output_format: str = "xml"

    def __post_init__(self) -> None:
        if self.output_format != "xml":
            raise ValueError(f"Unsupported Checkstyle output format: {self.output_format!r}")

    def to_args(self) -> list[str]:
        return [
            "-c", str(self.config_file.absolute()),  # ruleset
            str(self.source_dir.absolute()),
            "-f", self.output_format,
            "-o", str(self.output_file.absolute()),
        ]


@dataclass
class Finding:
    file: str
    severity: str
    message: str
    line: int | None = None
    column: int | None = None
    source: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class FileEntry:
    name: str
    findings: list[Finding] = field(default_factory=list)


@dataclass
class Report:
    path: Path
    files: list[FileEntry]
    version: str | None = None

    def findings(self) -> Iterator[Finding]:
        for entry in self.files:
            yield from entry.findings

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": str(self.path),
            "version": self.version,
            "files": [
                {"name": f.name, "findings": [x.to_dict() for x in f.findings]}
                for f in self.files
            ],
        }


@dataclass(frozen=True)
class TransformationRule:
    xslt: Path
    output: Path


@dataclass
class GateResult:
    issues_found: int = 0
    summary_lines: list[str] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        return self.issues_found > 0
