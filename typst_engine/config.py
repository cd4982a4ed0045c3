"""Configuration constants, extension tables, and .env loading.

WHY: Centralizes all configurable values so they are easy to find,
update, and override. Extension tables and the raw target format are
plain data structures, not buried in logic, so the policy check, the
engine descriptor, and the CLI all agree on them.

HOW: python-dotenv loads the .env file on import. Constants are defined
as module-level sets and strings. load_raw_format() validates the raw
format tag and load_log_level() the logging level, each with a clear
error when the value is unusable.

RULES:
- QMD_EXTENSIONS lists executable document extensions (code allowed)
- MD_EXTENSIONS lists plain markdown extensions (code is a usage error)
- Extensions are lowercase and include the leading dot
- All defaults can be overridden via environment variables
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Engine identity
# ---------------------------------------------------------------------------

ENGINE_NAME = "typst"
DEFAULT_EXT = ".qmd"

# ---------------------------------------------------------------------------
# Extension classification tables
# ---------------------------------------------------------------------------

QMD_EXTENSIONS: frozenset[str] = frozenset({".qmd"})
"""Extensions of documents that may contain executable code cells."""

MD_EXTENSIONS: frozenset[str] = frozenset({".md", ".markdown"})
"""Plain markdown extensions; executable code cells are rejected."""

# ---------------------------------------------------------------------------
# Rendering and logging defaults
# ---------------------------------------------------------------------------

DEFAULT_RAW_FORMAT = os.getenv("TYPST_ENGINE_RAW_FORMAT", "typst")
LOG_LEVEL = os.getenv("TYPST_ENGINE_LOG_LEVEL", "WARNING").upper()

_FORBIDDEN_FORMAT_CHARS = frozenset("{}`=")


def load_raw_format(value: str | None = None) -> str:
    """Return a validated raw-block format tag.

    WHY: The tag is interpolated into ```{=tag} fence headers. A tag with
    whitespace, braces, or backticks would produce a fence that the
    chunker (and Pandoc) cannot read back.

    HOW: Uses ``value`` when given, else DEFAULT_RAW_FORMAT from the
    environment. Strips surrounding whitespace and rejects empty tags or
    tags containing whitespace or fence syntax characters.

    RULES:
    - Raises ValueError for empty or malformed tags
    - Never returns a placeholder value
    """
    tag = (value if value is not None else DEFAULT_RAW_FORMAT).strip()
    if not tag:
        raise ValueError(
            "Raw format not configured. "
            "Set TYPST_ENGINE_RAW_FORMAT or pass --raw-format."
        )
    if any(ch.isspace() or ch in _FORBIDDEN_FORMAT_CHARS for ch in tag):
        raise ValueError(
            f"Invalid raw format {tag!r}: must not contain whitespace, "
            f"braces, backticks, or '='."
        )
    return tag


_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")


def load_log_level(value: str | None = None) -> str:
    """Return a validated logging level name.

    Uses ``value`` when given, else LOG_LEVEL from the environment.
    Matching is case-insensitive.

    Raises:
        ValueError: If the name is not a standard logging level.
    """
    level = (value if value is not None else LOG_LEVEL).strip().upper()
    if level not in _LOG_LEVELS:
        raise ValueError(
            f"Invalid log level {level!r}. "
            f"Set TYPST_ENGINE_LOG_LEVEL to one of: {', '.join(_LOG_LEVELS)}."
        )
    return level
