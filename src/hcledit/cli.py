"""
Command line interface.

    hcledit attribute get ADDRESS [-f FILE] [-o value|hcl|json|yaml]

Reads HCL from FILE (stdin by default) and writes to stdout. Errors go to
stderr with exit status 1; an address that matches nothing prints nothing
and exits 0.
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

from hcledit import __version__
from hcledit.address import EmptyAddressError
from hcledit.attribute_get import OutputFormat, get_attribute
from hcledit.lexer import HCLParseError
from hcledit.value import MalformedAttributeError

logger = logging.getLogger("hcledit")


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose or os.environ.get("HCLEDIT_DEBUG") else logging.INFO
    logger.setLevel(level)
    # main() may run more than once per process; bind to the current stderr
    for old in list(logger.handlers):
        logger.removeHandler(old)
    h = logging.StreamHandler(sys.stderr)
    h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    logger.addHandler(h)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="hcledit", description="Read values from HCL files by address")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("-v", "--verbose", action="store_true", help="log address resolution to stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp_attr = sub.add_parser("attribute", help="operate on attributes")
    attr_sub = sp_attr.add_subparsers(dest="attr_cmd", required=True)

    sp_get = attr_sub.add_parser("get", help="print the value of the attribute at ADDRESS")
    sp_get.add_argument("address", help="dotted address, e.g. resource.aws_instance.foo.ami")
    sp_get.add_argument("-f", "--file", default="-", help="input file (default: - for stdin)")
    sp_get.add_argument(
        "-o",
        "--output",
        choices=[f.value for f in OutputFormat],
        default=OutputFormat.VALUE.value,
        help="output format (default: value)",
    )
    return p


def _run_attribute_get(args: argparse.Namespace) -> None:
    output_format = OutputFormat(args.output)
    if args.file == "-":
        get_attribute(sys.stdin, sys.stdout, "<stdin>", args.address, output_format)
        return

    with open(args.file, "r", encoding="utf-8") as f:
        get_attribute(f, sys.stdout, os.path.basename(args.file), args.address, output_format)


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    try:
        _run_attribute_get(args)
    except (EmptyAddressError, HCLParseError, MalformedAttributeError, OSError, UnicodeDecodeError) as e:
        logger.debug("attribute get failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
