import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from stylegate.analyzers.base import RawToolResult, StaticCodeAnalyzer
from stylegate.core.config import settings
from stylegate.domain.schemas import ContextConfig, ProjectConfig, XSLTSettings
from stylegate.main import app

SAMPLE_REPORT = """<?xml version="1.0" encoding="UTF-8"?>
<checkstyle version="10.12.0">
  <file name="src/main/java/demo/App.java">
    <error line="3" column="5" severity="error" message="Missing a Javadoc comment." source="com.puppycrawl.tools.checkstyle.checks.javadoc.MissingJavadocMethodCheck"/>
    <error line="7" severity="info" message="Line is longer than 100 characters (found 112)." source="com.puppycrawl.tools.checkstyle.checks.sizes.LineLengthCheck"/>
  </file>
  <file name="src/main/java/demo/Clean.java">
  </file>
  <file name="src/main/java/demo/Util.java">
    <error line="1" column="12" severity="warning" message="'{' is not preceded with whitespace." source="com.puppycrawl.tools.checkstyle.checks.whitespace.WhitespaceAroundCheck"/>
    <error severity="error" message="Unused import - java.util.List."/>
  </file>
</checkstyle>
"""

CLEAN_REPORT = """<?xml version="1.0" encoding="UTF-8"?>
<checkstyle version="10.12.0">
  <file name="src/main/java/demo/App.java"/>
</checkstyle>
"""

COUNT_XSLT = """<xsl:stylesheet version="1.0" xmlns:xsl="http://www.w3.org/1999/XSL/Transform">
  <xsl:output method="text"/>
  <xsl:template match="/">
    <xsl:value-of select="count(//error)"/>
  </xsl:template>
</xsl:stylesheet>
"""

FILES_XSLT = """<xsl:stylesheet version="1.0" xmlns:xsl="http://www.w3.org/1999/XSL/Transform">
  <xsl:output method="xml" indent="no"/>
  <xsl:template match="/checkstyle">
    <files>
      <xsl:for-each select="file">
        <f errors="{count(error)}"><xsl:value-of select="@name"/></f>
      </xsl:for-each>
    </files>
  </xsl:template>
</xsl:stylesheet>
"""

PER_ERROR_XSLT = """<xsl:stylesheet version="1.0" xmlns:xsl="http://www.w3.org/1999/XSL/Transform">
  <xsl:output method="text"/>
  <xsl:template match="/">
    <xsl:for-each select="//error">
      <xsl:value-of select="../@name"/>: <xsl:value-of select="@message"/><xsl:text>&#10;</xsl:text>
    </xsl:for-each>
  </xsl:template>
</xsl:stylesheet>
"""


@pytest.fixture(autouse=True)
def _use_tmp_project(tmp_path, monkeypatch):
    """Point every default path at a temp project so tests never touch the real tree."""
    monkeypatch.setattr(settings, "BASE_DIR", str(tmp_path))
    monkeypatch.setattr(settings, "CHECKSTYLE_ENTRY_POINT", None)


class FakeAnalyzer(StaticCodeAnalyzer):
    """Writes a canned report, optionally finishing with ``sys.exit`` like Checkstyle's Main."""

    def __init__(self, xml: str = SAMPLE_REPORT, exit_code: int | None = None):
        self.xml = xml
        self.exit_code = exit_code
        self.requests = []

    def tool_name(self) -> str:
        return "fake-checkstyle"

    def analyze(self, request):
        self.requests.append(request)
        request.output_file.write_text(self.xml, encoding="utf-8")
        if self.exit_code is not None:
            sys.exit(self.exit_code)
        return RawToolResult("fake-checkstyle", 0, "", "", request.output_file.name)


def make_project(root: Path, transformations=None, severity_levels=None) -> ProjectConfig:
    def ctx(kind: str, report: str) -> ContextConfig:
        data = {
            "source_dir": root / "src" / kind / "java",
            "config_file": root / "checkstyle-config.xml",
            "output_file": root / "target" / report,
            "transformations": transformations,
        }
        if severity_levels is not None:
            data["severity_levels"] = severity_levels
        return ContextConfig(**data)

    return ProjectConfig(
        compile=ctx("main", "checkstyle-report.xml"),
        test=ctx("test", "checkstyle-test-report.xml"),
    )


@pytest.fixture
def xslt_rules(tmp_path) -> list[XSLTSettings]:
    count = tmp_path / "xslt" / "count.xsl"
    files = tmp_path / "xslt" / "files.xsl"
    count.parent.mkdir()
    count.write_text(COUNT_XSLT, encoding="utf-8")
    files.write_text(FILES_XSLT, encoding="utf-8")
    return [
        XSLTSettings(xslt=count, output=tmp_path / "target" / "count.txt"),
        XSLTSettings(xslt=files, output=tmp_path / "out" / "files.xml"),
    ]


@pytest.fixture
def report_file(tmp_path) -> Path:
    p = tmp_path / "checkstyle-report.xml"
    p.write_text(SAMPLE_REPORT, encoding="utf-8")
    return p


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def per_error_xslt(tmp_path) -> Path:
    p = tmp_path / "xslt" / "per-error.xsl"
    p.parent.mkdir(exist_ok=True)
    p.write_text(PER_ERROR_XSLT, encoding="utf-8")
    return p
