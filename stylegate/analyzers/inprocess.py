from __future__ import annotations

import importlib
import io
from contextlib import redirect_stderr, redirect_stdout
from typing import Any, Callable

from stylegate.domain.errors import AnalyzerNotFoundError
from stylegate.domain.models import AnalysisRequest

from .base import RawToolResult, StaticCodeAnalyzer

EntryPoint = Callable[[list[str]], Any]


def load_entry_point(ref: str) -> EntryPoint:
    """Resolve ``"package.module:function"``."""
    module_name, sep, attr = ref.partition(":")
    if not sep or not module_name or not attr:
        raise AnalyzerNotFoundError(f"Entry point must look like 'module:function', got {ref!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise AnalyzerNotFoundError(f"Cannot import analyzer module {module_name!r}") from e

    target: Any = module
    for part in attr.split("."):
        target = getattr(target, part, None)
        if target is None:
            raise AnalyzerNotFoundError(f"{module_name!r} has no attribute {attr!r}")
    if not callable(target):
        raise AnalyzerNotFoundError(f"{ref!r} is not callable")
    return target


class InProcessAnalyzer(StaticCodeAnalyzer):
    """Calls a Python ``main(argv)`` that speaks the Checkstyle CLI arguments.

    Such entry points usually finish with ``sys.exit``; callers are expected
    to wrap ``analyze`` in ``stylegate.analyzers.guard.no_exit``. The exit
    code is not observable from here and is reported as 0.
    """

    def __init__(self, entry_point: EntryPoint | str, name: str = "checkstyle"):
        self.entry_point = load_entry_point(entry_point) if isinstance(entry_point, str) else entry_point
        self._name = name

    def tool_name(self) -> str:
        return self._name

    def analyze(self, request: AnalysisRequest) -> RawToolResult:
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            rc = self.entry_point(request.to_args())

        return RawToolResult(
            tool=self._name,
            exit_code=rc if isinstance(rc, int) else 0,
            stdout=out.getvalue(),
            stderr=err.getvalue(),
            artifact=request.output_file.name,
        )
