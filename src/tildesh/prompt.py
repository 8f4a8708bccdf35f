"""Prompt construction for tildesh."""

import logging
import os
import sys

from tildesh.constants import BLUE, BOLD, GREEN, RESET
from tildesh.environment import Environment

log = logging.getLogger(__name__)


def supports_color() -> bool:
    """Return whether ANSI color output should be used."""
    if os.getenv("NO_COLOR") is not None:
        return False
    if os.getenv("TERM", "").lower() == "dumb":
        return False
    return sys.stdout.isatty()


def abbreviate_path(cwd: str, home: str | None) -> str:
    """Collapse the home directory itself to ``~``."""
    if home and cwd == home:
        return "~"
    return cwd


def build_prompt(env: Environment, color: bool | None = None) -> str:
    """Return the two-line prompt for the current user, host and directory."""
    if color is None:
        color = supports_color()

    username = env.username()
    symbol = "#" if username == "root" else "%"
    try:
        cwd = env.getcwd()
    except OSError as e:
        log.debug("current directory unavailable: %s", e)
        cwd = env.get("PWD") or "?"
    where = abbreviate_path(cwd, env.get("HOME"))
    host = env.hostname()

    if not color:
        return f"╭─{username}@{host} {where} \n╰─{symbol} "
    return (
        f"{BOLD}╭─{RESET}{GREEN}{username}@{host}{RESET} {BLUE}{where}{RESET} \n"
        f"{BOLD}╰─{RESET}{BOLD}{symbol}{RESET} "
    )
