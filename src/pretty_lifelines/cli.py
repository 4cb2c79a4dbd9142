from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import render_script
from .errors import ScriptError
from .script import parse_script, script_lines

logger = logging.getLogger(__name__)


def _read_script(source: str) -> str:
    """Read the script as UTF-8 regardless of the locale encoding."""
    if source == "-":
        data = sys.stdin.buffer.read()
    else:
        data = Path(source).read_bytes()
    return data.decode("utf-8")


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint."""
    parser = argparse.ArgumentParser(
        prog="pretty-lifelines",
        description="Render an actor script to a sequence diagram SVG.",
    )
    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="Script file to read ('-' or omitted for standard input).",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write the SVG to this file instead of standard output.",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only validate the script; print nothing on success.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log interpreter and layout details to standard error.",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        text = _read_script(args.input)
    except OSError as err:
        print(f"error: cannot read {args.input}: {err.strerror}", file=sys.stderr)
        raise SystemExit(1)
    except UnicodeDecodeError as err:
        print(
            f"error: cannot read {args.input}: invalid UTF-8 at byte {err.start}",
            file=sys.stderr,
        )
        raise SystemExit(1)

    try:
        if args.check:
            parse_script(script_lines(text))
            return
        svg = render_script(text)
    except ScriptError as err:
        print(f"error: {err}", file=sys.stderr)
        raise SystemExit(1)

    if args.output is None:
        sys.stdout.write(svg + "\n")
    else:
        args.output.write_text(svg + "\n", encoding="utf-8")
        logger.info("wrote %s", args.output)
