from __future__ import annotations

from pathlib import Path

from lxml import etree

from stylegate.domain.errors import ReportUnreadableError
from stylegate.domain.models import FileEntry, Finding, Report


def load_report(path: Path) -> Report:
    """Parse a Checkstyle XML report.

    Layout::

        <checkstyle version="...">
          <file name="...">
            <error severity="..." message="..." line="..." column="..." source="..."/>
          </file>
        </checkstyle>

    ``file`` and ``error`` order is preserved exactly as in the document.
    """
    path = Path(path)
    try:
        root = etree.parse(str(path)).getroot()
    except (OSError, etree.XMLSyntaxError) as e:
        raise ReportUnreadableError(f"Cannot read Checkstyle report {path}: {e}") from e

    files: list[FileEntry] = []
    for file_elem in root.iterfind("file"):
        name = file_elem.get("name", "")
        findings = [
            Finding(
                file=name,
                severity=err.get("severity", ""),
                message=err.get("message", ""),
                line=_int(err.get("line")),
                column=_int(err.get("column")),
                source=err.get("source"),
            )
            for err in file_elem.iterfind("error")
        ]
        files.append(FileEntry(name=name, findings=findings))

    return Report(path=path, files=files, version=root.get("version"))


def _int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None
