#!/usr/bin/env python3
"""Build-tool entry points.

    stylegate checkstyle [--context compile|test] [--config stylegate.json]
    stylegate checkstyle-check [--context compile|test] [--config stylegate.json]

``checkstyle`` never fails on findings. ``checkstyle-check`` exits 1 when
findings match the failing severity levels and 2 on any other error.
"""

import argparse
import sys
from pathlib import Path

from stylegate.core.containers import build_checkstyle_service
from stylegate.core.logging import setup_logging
from stylegate.domain.errors import CheckstyleGateError, StylegateError
from stylegate.domain.models import BuildContext


def build_parser():
    ap = argparse.ArgumentParser(prog="stylegate")
    sub = ap.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("checkstyle", "Runs checkstyle"),
        ("checkstyle-check", "Runs checkstyle and fails if issues are found"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument(
            "--context",
            choices=[c.value for c in BuildContext],
            default=BuildContext.COMPILE.value,
            help="Which sources to check (default: compile)",
        )
        p.add_argument("--config", type=Path, default=None, help="JSON project file")
    return ap


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging()

    try:
        service = build_checkstyle_service(args.config)
        if args.command == "checkstyle":
            service.run(args.context)
        else:
            service.run_and_check(args.context)
    except CheckstyleGateError as e:
        print(f"[stylegate] FAILED: {e}", file=sys.stderr)
        return 1
    except (StylegateError, OSError, ValueError) as e:
        print(f"[stylegate] ERROR: {e}", file=sys.stderr)
        return 2

    print("[stylegate] PASSED" if args.command == "checkstyle-check" else "[stylegate] DONE")
    return 0


if __name__ == "__main__":
    sys.exit(main())
