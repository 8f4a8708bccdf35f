"""Access to process-wide state: environment variables, cwd, user and host."""

from __future__ import annotations

import logging
import os
import pwd
import socket
from typing import Protocol

log = logging.getLogger(__name__)

UNKNOWN_USER = "ERROR"


class Environment(Protocol):
    """What the command loop and builtins need from the running process."""

    def get(self, name: str) -> str | None: ...

    def set(self, name: str, value: str) -> None: ...

    def getcwd(self) -> str: ...

    def chdir(self, path: str) -> None: ...

    def username(self) -> str: ...

    def hostname(self) -> str: ...


class OsEnvironment:
    """Environment backed by ``os.environ`` and the real working directory."""

    def get(self, name: str) -> str | None:
        return os.environ.get(name)

    def set(self, name: str, value: str) -> None:
        # os.environ raises ValueError for embedded NULs and OSError from putenv.
        os.environ[name] = value

    def getcwd(self) -> str:
        return os.getcwd()

    def chdir(self, path: str) -> None:
        os.chdir(path)

    def username(self) -> str:
        """Return the login name for the effective uid, or a placeholder."""
        try:
            return pwd.getpwuid(os.geteuid()).pw_name
        except KeyError:
            log.debug("no passwd entry for uid %d", os.geteuid())
            return UNKNOWN_USER

    def hostname(self) -> str:
        return socket.gethostname()
