"""Builtin commands: ``cd`` and ``exit``."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from typing import TextIO

from tildesh.constants import MAX_TOKENS, PATH_MAX, PATH_SEPARATOR
from tildesh.environment import Environment
from tildesh.errors import DirectoryChangeError, EnvironmentUpdateError, PathTooLongError
from tildesh.tokenizer import tokenize

log = logging.getLogger(__name__)

CD = "cd"
EXIT = "exit"

HOME_MARKER = "~"
PREVIOUS_MARKER = "-"


def path_length(text: str) -> int:
    """Length of *text* in bytes, as the OS will see it."""
    return len(os.fsencode(text))


class PathBuilder:
    """Path under construction with a fixed maximum length."""

    def __init__(self, anchor: str, limit: int = PATH_MAX):
        self.limit = limit
        self._path = ""
        self._append(anchor)

    def __str__(self) -> str:
        return self._path

    def _append(self, text: str) -> None:
        length = path_length(self._path) + path_length(text)
        if length > self.limit:
            raise PathTooLongError(length, self.limit)
        self._path += text

    def add_segment(self, segment: str) -> None:
        """Append *segment*, adding a separator unless the path already ends in one."""
        if not self._path.endswith(PATH_SEPARATOR):
            self._append(PATH_SEPARATOR)
        self._append(segment)


@dataclass(frozen=True)
class CdTarget:
    """Where ``cd`` will go and whether the path is echoed first."""

    path: str
    echo: bool = False


def _require(env: Environment, name: str, given: str | None) -> str:
    value = env.get(name)
    if not value:
        raise DirectoryChangeError(given or "", reason=f"{name} not set")
    return value


def resolve_target(
    given_path: str | None, env: Environment, *, path_max: int = PATH_MAX
) -> CdTarget:
    """Work out the absolute path ``cd given_path`` should change to.

    The anchor is ``HOME`` for no argument or a leading ``~`` segment,
    ``OLDPWD`` for ``-``, ``/`` for absolute paths and the current directory
    otherwise. The remaining ``/``-separated segments are appended in order
    without resolving ``.`` or ``..``.

    Raises:
        DirectoryChangeError: If the anchor variable is unset or the current
            directory cannot be read.
        PathTooLongError: If the assembled path exceeds *path_max*.
    """
    if given_path is None:
        return CdTarget(str(PathBuilder(_require(env, "HOME", given_path), path_max)))

    if given_path == PREVIOUS_MARKER:
        # Full replacement, nothing gets appended.
        return CdTarget(str(PathBuilder(_require(env, "OLDPWD", given_path), path_max)), echo=True)

    segments = tokenize(given_path, PATH_SEPARATOR, MAX_TOKENS)
    if segments.overflow:
        raise PathTooLongError(path_length(given_path), path_max)
    remaining = list(segments)

    if given_path.startswith(PATH_SEPARATOR):
        anchor = PATH_SEPARATOR
    elif remaining and remaining[0] == HOME_MARKER:
        anchor = _require(env, "HOME", given_path)
        remaining = remaining[1:]
    else:
        try:
            anchor = env.getcwd()
        except OSError as e:
            raise DirectoryChangeError(given_path, e) from e

    builder = PathBuilder(anchor, path_max)
    for segment in remaining:
        builder.add_segment(segment)
    return CdTarget(str(builder))


def change_directory(
    given_path: str | None,
    env: Environment,
    *,
    path_max: int = PATH_MAX,
    stdout: TextIO | None = None,
) -> str:
    """Change the working directory and update ``OLDPWD``/``PWD``.

    Args:
        given_path: The argument given to ``cd``, or ``None`` for no argument.
        env: Environment to read anchors from and apply the change to.
        path_max: Longest path that may be assembled.
        stdout: Stream that ``cd -`` echoes the resolved path to.

    Returns:
        The path that is now the working directory.

    Raises:
        PathTooLongError: If the target does not fit in *path_max*.
        DirectoryChangeError: If the target cannot be resolved or entered.
            Environment variables are left untouched.
        EnvironmentUpdateError: If the directory changed but ``OLDPWD`` or
            ``PWD`` could not be updated. The change is not undone.
    """
    if given_path is not None and path_length(given_path) > path_max:
        raise PathTooLongError(path_length(given_path), path_max)

    target = resolve_target(given_path, env, path_max=path_max)
    log.debug("cd %r -> %s", given_path, target.path)
    if target.echo:
        print(target.path, file=stdout or sys.stdout)

    try:
        previous = env.getcwd()
    except OSError as e:
        log.debug("current directory unavailable: %s", e)
        previous = env.get("PWD") or ""

    try:
        env.chdir(target.path)
    except OSError as e:
        raise DirectoryChangeError(target.path, e) from e
    except ValueError as e:
        # Embedded NUL bytes never reach the OS.
        raise DirectoryChangeError(target.path, reason=str(e)) from e

    for name, value in (("OLDPWD", previous), ("PWD", target.path)):
        try:
            env.set(name, value)
        except (OSError, ValueError) as e:
            raise EnvironmentUpdateError(name, e) from e
    return target.path
