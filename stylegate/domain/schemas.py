from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from stylegate.domain.models import DEFAULT_SEVERITY_LEVELS, BuildContext, TransformationRule


class XSLTSettings(BaseModel):
    """One XSLT rule applied to the Checkstyle XML report."""

    xslt: Path = Field(..., description="Stylesheet to compile.")
    output: Path = Field(..., description="Where the transformed document is written.")

    def to_rule(self, base: Path | None = None) -> TransformationRule:
        return TransformationRule(xslt=_under(base, self.xslt), output=_under(base, self.output))


class ContextConfig(BaseModel):
    """Checkstyle settings for one build context (compile or test sources)."""

    source_dir: Path
    config_file: Path
    output_file: Path
    transformations: list[XSLTSettings] | None = Field(
        None,
        description="Optional XSLT rules. `None` and `[]` both skip the step.",
    )
    severity_levels: set[str] = Field(
        default_factory=lambda: set(DEFAULT_SEVERITY_LEVELS),
        description="Severity labels that fail `checkstyle-check`.",
        json_schema_extra={"examples": [["warning", "error"]]},
    )

    def resolved(self, base: Path) -> ContextConfig:
        return self.model_copy(
            update={
                "source_dir": _under(base, self.source_dir),
                "config_file": _under(base, self.config_file),
                "output_file": _under(base, self.output_file),
                "transformations": (
                    None
                    if self.transformations is None
                    else [
                        XSLTSettings(xslt=_under(base, t.xslt), output=_under(base, t.output))
                        for t in self.transformations
                    ]
                ),
            }
        )

    def rules(self) -> frozenset[TransformationRule] | None:
        if self.transformations is None:
            return None
        return frozenset(t.to_rule() for t in self.transformations)


class ProjectConfig(BaseModel):
    compile: ContextConfig
    test: ContextConfig

    def for_context(self, context: BuildContext | str) -> ContextConfig:
        return getattr(self, BuildContext(context).value)


def _under(base: Path | None, p: Path) -> Path:
    if base is None or p.is_absolute():
        return p
    return base / p
