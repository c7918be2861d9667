from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from lxml import etree

from stylegate.domain.errors import TransformationError
from stylegate.domain.models import TransformationRule

logger = logging.getLogger(__name__)


def apply_xslt(report_file: Path, rules: Iterable[TransformationRule]) -> list[Path]:
    """Apply each XSLT rule to the report and write one output per rule.

    Rules are independent: the report is parsed again for every rule and
    never modified. The first failure aborts the call.
    """
    written: list[Path] = []
    for rule in rules:
        apply_rule(report_file, rule)
        written.append(rule.output)
    return written


def apply_rule(report_file: Path, rule: TransformationRule) -> None:
    try:
        source = etree.parse(str(report_file))
    except (OSError, etree.XMLSyntaxError) as e:
        raise TransformationError(f"Cannot load Checkstyle report {report_file}: {e}") from e

    try:
        transform = etree.XSLT(etree.parse(str(rule.xslt)))
    except (OSError, etree.XMLSyntaxError, etree.XSLTParseError) as e:
        raise TransformationError(f"Cannot compile XSLT {rule.xslt}: {e}") from e

    try:
        result = transform(source)
    except etree.XSLTApplyError as e:
        raise TransformationError(f"XSLT {rule.xslt} failed: {e}") from e

    try:
        # bytes() honours xsl:output and is b"" for an empty result
        data = bytes(result)
    except (LookupError, etree.LxmlError) as e:
        raise TransformationError(f"Cannot serialise output of XSLT {rule.xslt}: {e}") from e

    rule.output.parent.mkdir(parents=True, exist_ok=True)
    with open(rule.output, "wb") as fh:
        fh.write(data)

    logger.info("Wrote %s (xslt=%s)", rule.output, rule.xslt.name)
