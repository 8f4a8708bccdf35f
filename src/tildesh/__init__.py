"""tildesh - a small interactive command shell."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("tildesh")
except PackageNotFoundError:
    __version__ = "0.0.0"
