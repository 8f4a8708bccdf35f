"""Configuration model for tildesh."""

from pydantic import BaseModel, Field

from tildesh.constants import MAX_TOKENS, PATH_MAX


class ShellConfig(BaseModel):
    """Runtime configuration for tildesh."""

    color: bool | None = Field(
        default=None,
        description=(
            "Force ANSI colors in the prompt on (True) or off (False). "
            "None detects color support from NO_COLOR, TERM and the terminal."
        ),
    )
    max_tokens: int = Field(
        default=MAX_TOKENS,
        ge=2,
        description=(
            "Capacity of the token buffer for one input line, sentinel slot included. "
            "Lines with more words are rejected."
        ),
    )
    path_max: int = Field(
        default=PATH_MAX,
        ge=1,
        description="Longest path the cd builtin will assemble.",
    )
