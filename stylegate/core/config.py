import json
import os
from pathlib import Path

from pydantic import BaseModel

from stylegate.domain.schemas import ContextConfig, ProjectConfig


class Settings(BaseModel):
    BASE_DIR: str = os.getenv("BASE_DIR", ".")
    TARGET_DIR: str = os.getenv("TARGET_DIR", "target")

    # Rulesets (test falls back to the compile ruleset)
    CHECKSTYLE_CONFIG: str = os.getenv("CHECKSTYLE_CONFIG", "checkstyle-config.xml")
    CHECKSTYLE_TEST_CONFIG: str | None = os.getenv("CHECKSTYLE_TEST_CONFIG")

    # Source roots
    CHECKSTYLE_SOURCE_DIR: str = os.getenv("CHECKSTYLE_SOURCE_DIR", "src/main/java")
    CHECKSTYLE_TEST_SOURCE_DIR: str = os.getenv("CHECKSTYLE_TEST_SOURCE_DIR", "src/test/java")

    # Reports (default to files under TARGET_DIR)
    CHECKSTYLE_TARGET: str | None = os.getenv("CHECKSTYLE_TARGET")
    CHECKSTYLE_TEST_TARGET: str | None = os.getenv("CHECKSTYLE_TEST_TARGET")

    # Comma separated; an empty value means nothing fails the build
    CHECKSTYLE_SEVERITY_LEVELS: str = os.getenv("CHECKSTYLE_SEVERITY_LEVELS", "warning,error")

    # Analyzer
    CHECKSTYLE_CMD: str = os.getenv("CHECKSTYLE_CMD", "checkstyle")
    CHECKSTYLE_ENTRY_POINT: str | None = os.getenv("CHECKSTYLE_ENTRY_POINT")
    CHECKSTYLE_TIMEOUT: int | None = int(os.environ["CHECKSTYLE_TIMEOUT"]) if os.getenv("CHECKSTYLE_TIMEOUT") else None

    def base_dir(self) -> Path:
        return Path(self.BASE_DIR)

    def severity_levels(self) -> set[str]:
        return {s.strip() for s in self.CHECKSTYLE_SEVERITY_LEVELS.split(",") if s.strip()}

    def project_config(self) -> ProjectConfig:
        target = Path(self.TARGET_DIR)
        compile_cfg = ContextConfig(
            source_dir=Path(self.CHECKSTYLE_SOURCE_DIR),
            config_file=Path(self.CHECKSTYLE_CONFIG),
            output_file=Path(self.CHECKSTYLE_TARGET or target / "checkstyle-report.xml"),
            severity_levels=self.severity_levels(),
        )
        test_cfg = ContextConfig(
            source_dir=Path(self.CHECKSTYLE_TEST_SOURCE_DIR),
            config_file=Path(self.CHECKSTYLE_TEST_CONFIG or self.CHECKSTYLE_CONFIG),
            output_file=Path(self.CHECKSTYLE_TEST_TARGET or target / "checkstyle-test-report.xml"),
            severity_levels=self.severity_levels(),
        )
        base = self.base_dir()
        return ProjectConfig(compile=compile_cfg.resolved(base), test=test_cfg.resolved(base))


def load_project_config(path: Path | None = None) -> ProjectConfig:
    """Environment defaults, optionally overridden by a JSON project file.

    The file holds ``compile`` and/or ``test`` objects with any of the
    ``ContextConfig`` fields; relative paths in it resolve against the
    file's directory.
    """
    project = settings.project_config()
    if path is None:
        return project

    overrides = json.loads(Path(path).read_text(encoding="utf-8") or "{}")
    base = Path(path).parent

    merged = {}
    for name in ("compile", "test"):
        current = getattr(project, name)
        if name not in overrides:
            merged[name] = current
            continue
        # partial validation first, so only paths coming from the file get re-based
        override = ContextConfig.model_validate({**current.model_dump(), **overrides[name]})
        rebased = override.resolved(base)
        merged[name] = current.model_copy(
            update={k: getattr(rebased, k) for k in overrides[name] if k in ContextConfig.model_fields}
        )
    return ProjectConfig(**merged)


settings = Settings()
