"""Error types raised by tildesh builtins and process management."""

from __future__ import annotations


class ShellError(Exception):
    """Base class for errors the command loop reports and recovers from."""


class PathTooLongError(ShellError):
    """Raised when a cd target does not fit in the path buffer."""

    def __init__(self, length: int, limit: int):
        super().__init__(f"ERROR: Path Invalid: too long ({length} > {limit})")
        self.length = length
        self.limit = limit


class DirectoryChangeError(ShellError):
    """Raised when the OS rejects a directory change."""

    def __init__(self, path: str, cause: OSError | None = None, reason: str | None = None):
        detail = reason or (cause.strerror if cause is not None else None) or "unknown error"
        super().__init__(f"cd: {path}: {detail}" if path else f"cd: {detail}")
        self.path = path
        self.cause = cause


class EnvironmentUpdateError(ShellError):
    """Raised when OLDPWD or PWD cannot be updated after a successful cd."""

    def __init__(self, name: str, cause: Exception):
        super().__init__(f"cd: cannot set {name}: {cause}")
        self.name = name
        self.cause = cause


class ProcessCreationError(ShellError):
    """Raised when a child process cannot be created at all."""

    def __init__(self, cause: OSError):
        super().__init__(f"fork failed: {cause.strerror or cause}")
        self.cause = cause
