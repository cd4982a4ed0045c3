"""Extension policy for documents containing executable code.

WHY: Plain markdown files (.md, .markdown) are claimed by the engine so
they can be rendered to Typst, but they must not carry executable cells;
those belong in .qmd files. Catching this before rendering gives the
user a clear message instead of a half-executed document.

HOW: check_executable_extension() looks up the file's extension in the
non-executable table and, if it is there, raises UsageError when the
chunk list contains any code chunk.

RULES:
- The code language is irrelevant; any CodeChunk counts
- Extension comparison is case-insensitive
- Only the offending document fails; callers decide how to report it
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from typst_engine.config import DEFAULT_EXT, MD_EXTENSIONS
from typst_engine.core.chunks import Chunk, has_executable_code

EXECUTABLE_CODE_MESSAGE = (
    "You must use the {} extension for documents with executable code.".format(DEFAULT_EXT)
)


class UsageError(Exception):
    """A document was used in a way its file type does not allow."""


def check_executable_extension(
    path: str | Path,
    chunks: list[Chunk],
    non_executable_extensions: Iterable[str] = MD_EXTENSIONS,
) -> None:
    """Reject executable code in plain markdown documents.

    Args:
        path: Document path or bare extension (e.g. ".md").
        chunks: The parsed document.
        non_executable_extensions: Lowercase extensions, with dot, that
            may not contain code cells.

    Raises:
        UsageError: If the extension is non-executable and any chunk is code.
    """
    if _extension_of(path) in set(non_executable_extensions) and has_executable_code(chunks):
        raise UsageError(EXECUTABLE_CODE_MESSAGE)


def _extension_of(path: str | Path) -> str:
    """Lowercase extension of a path, or the value itself if it is a bare extension.

    A bare extension has exactly one dot, in front (".md"). Dotfiles such
    as ".notes.md" are paths and resolve to their last suffix.
    """
    text = str(path)
    name = Path(text).name
    if name == text and text.startswith(".") and text.count(".") == 1:
        return text.lower()
    return Path(text).suffix.lower()


