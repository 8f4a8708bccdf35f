"""Shared constants for tildesh."""

# Most words accepted on one input line (the last slot holds the sentinel).
MAX_TOKENS = 2048

# Longest path the cd builtin will assemble.
PATH_MAX = 4096

WHITESPACE = " \t\r\n\v\f"
PATH_SEPARATOR = "/"

BACKGROUND_MARKER = "&"

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_CANNOT_EXECUTE = 126
EXIT_NOT_FOUND = 127

BOLD = "\033[1m"
GREEN = "\033[92;1m"
BLUE = "\033[34;1m"
RESET = "\033[0m"
