"""Reassemble a chunk list into a Quarto document string.

WHY: The Typst engine hands Pandoc a document in which every prose span
is a raw Typst block, so the prose is passed through verbatim instead of
being read as markdown. Frontmatter and code cells are written back in
their usual syntax.

HOW: Each chunk is rendered to one block and the blocks are concatenated
in input order:
  metadata → ---\\n<content>\\n---
  markdown → ```{=<raw_format>}\\n<content>\\n```
  code     → ```{<language>}\\n<content>\\n```
Every block is followed by exactly one blank line.

RULES:
- Output is not the original text: prose changes delimiter syntax
- Original spacing between chunks is normalized to one blank line
- The raw format tag is validated; a malformed tag raises ValueError
- render([]) == ""
"""

from __future__ import annotations

from typst_engine.config import DEFAULT_RAW_FORMAT, load_raw_format
from typst_engine.core.chunks import Chunk, CodeChunk, MarkdownChunk, MetadataChunk

BLOCK_SEPARATOR = "\n\n"


def render_chunk(chunk: Chunk, raw_format: str = DEFAULT_RAW_FORMAT) -> str:
    """Render a single chunk, including its trailing blank line."""
    if isinstance(chunk, MetadataChunk):
        block = "---\n{}\n---".format(chunk.content)
    elif isinstance(chunk, MarkdownChunk):
        block = "```{{={}}}\n{}\n```".format(load_raw_format(raw_format), chunk.content)
    elif isinstance(chunk, CodeChunk):
        block = "```{{{}}}\n{}\n```".format(chunk.language, chunk.content)
    else:
        raise TypeError("Unknown chunk type: {!r}".format(type(chunk).__name__))
    return block + BLOCK_SEPARATOR


def render(chunks: list[Chunk], raw_format: str = DEFAULT_RAW_FORMAT) -> str:
    """Convert chunks back into a Quarto markdown string.

    Args:
        chunks: Chunks in document order, usually from parse().
        raw_format: Target format tag for markdown chunks, e.g. "typst".

    Returns:
        The combined document text.

    Raises:
        ValueError: If ``raw_format`` is not a usable fence tag.
    """
    raw_format = load_raw_format(raw_format)
    return "".join(render_chunk(chunk, raw_format) for chunk in chunks)
