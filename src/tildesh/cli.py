"""Command-line interface for tildesh."""

import argparse
import logging
import os
import sys

from tildesh import __version__
from tildesh.config import load_config
from tildesh.loop import Shell


def build_parser() -> argparse.ArgumentParser:
    """Build parser for the interactive shell."""
    parser = argparse.ArgumentParser(
        prog="tildesh",
        description="A small interactive shell with cd, exit and background jobs",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable ANSI colors in the prompt",
    )
    return parser


def _configure_streams() -> None:
    """Pass bytes that are not valid text through to exec and chdir unchanged."""
    for stream in (sys.stdin, sys.stdout):
        reconfigure = getattr(stream, "reconfigure", None)
        if reconfigure is not None:
            reconfigure(errors="surrogateescape")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(name)s %(levelname)s: %(message)s",
    )

    if not hasattr(os, "fork"):
        print("Error: tildesh requires a POSIX environment", file=sys.stderr)
        return 1

    _configure_streams()
    config = load_config()
    if args.no_color:
        config.color = False

    return Shell(config).run()


def entrypoint() -> None:
    raise SystemExit(main())
