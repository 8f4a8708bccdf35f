"""Launching external programs: spawn, then wait or detach."""

from __future__ import annotations

import errno
import logging
import os
import signal
import sys
from typing import Protocol, Sequence

from tildesh.constants import (
    BACKGROUND_MARKER,
    EXIT_CANNOT_EXECUTE,
    EXIT_NOT_FOUND,
)
from tildesh.errors import ProcessCreationError

log = logging.getLogger(__name__)


class ProcessSpawner(Protocol):
    """Creates child processes and decides how the shell waits on them."""

    def spawn(self, argv: Sequence[str]) -> int: ...

    def wait(self, pid: int) -> int | None: ...

    def detach(self, pid: int) -> None: ...


def split_background(tokens: Sequence[str]) -> tuple[list[str], bool]:
    """Strip a trailing ``&`` and report whether it was there.

    The returned flag is the only record of the background request; callers
    must not look for ``&`` in the trimmed argument list again.
    """
    argv = list(tokens)
    background = bool(argv) and argv[-1] == BACKGROUND_MARKER
    if background:
        argv.pop()
    return argv, background


def _exec_failure_status(exc: OSError) -> int:
    if exc.errno == errno.ENOENT:
        return EXIT_NOT_FOUND
    return EXIT_CANNOT_EXECUTE


class ForkSpawner:
    """``os.fork`` + ``os.execvp`` process model."""

    def spawn(self, argv: Sequence[str]) -> int:
        """Fork a child that replaces itself with ``argv[0]``.

        Returns:
            The child's pid, in the parent.

        Raises:
            ProcessCreationError: If the fork itself fails.
        """
        try:
            pid = os.fork()
        except OSError as e:
            raise ProcessCreationError(e) from e

        if pid == 0:
            # Child process: never returns into the shell loop.
            self._exec_child(list(argv))
        log.debug("spawned pid=%d argv=%s", pid, list(argv))
        return pid

    @staticmethod
    def _exec_child(argv: list[str]) -> None:
        status = EXIT_CANNOT_EXECUTE
        try:
            # Children must be able to wait on their own children.
            signal.signal(signal.SIGCHLD, signal.SIG_DFL)
            os.execvp(argv[0], argv)
        except OSError as e:
            status = _exec_failure_status(e)
            print(f"{argv[0]}: {e.strerror or e}", file=sys.stderr)
        except BaseException as e:
            print(f"{argv[0]}: {e}", file=sys.stderr)
        finally:
            try:
                sys.stderr.flush()
            finally:
                os._exit(status)

    def wait(self, pid: int) -> int | None:
        """Block until *pid* terminates and return its exit code.

        Returns ``None`` when the child was already reaped by the kernel, which
        happens once background children have made the shell ignore SIGCHLD.
        """
        while True:
            try:
                _, status = os.waitpid(pid, 0)
            except ChildProcessError:
                log.debug("pid=%d already reaped", pid)
                return None
            except KeyboardInterrupt:
                # The child got the same SIGINT; keep waiting for it to exit.
                continue
            code = os.waitstatus_to_exitcode(status)
            log.debug("pid=%d exited with %d", pid, code)
            return code

    def detach(self, pid: int) -> None:
        """Leave *pid* running and let the kernel reap it when it exits."""
        signal.signal(signal.SIGCHLD, signal.SIG_IGN)
        log.debug("detached pid=%d", pid)
