"""Chunk dataclasses for parsed Quarto documents.

WHY: A Quarto document interleaves YAML frontmatter, prose, and fenced
code cells. The serializer, the policy check, and the formatters each
need these pieces separately but in their original order. The chunk
types give all of them a single, well-typed representation.

HOW: Three frozen dataclasses, one per chunk kind, plus a Document
container:
  MetadataChunk — raw frontmatter text between the --- delimiters
  MarkdownChunk — prose between or around code fences (untrimmed)
  CodeChunk     — a ```{language} fenced cell, language and body trimmed
  Document      — the ordered chunk list and its source filename

RULES:
- Chunks are never mutated after construction
- At most one MetadataChunk exists, and only as the first chunk
- Order is significant: it determines reassembly order
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


class ChunkType(str, Enum):
    """Closed set of chunk kinds. Values are used in JSON output."""

    metadata = "metadata"
    markdown = "markdown"
    code = "code"


@dataclass(frozen=True)
class MetadataChunk:
    """YAML frontmatter text, delimiters stripped."""

    content: str

    @property
    def type(self) -> ChunkType:
        return ChunkType.metadata

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type.value, "content": self.content}


@dataclass(frozen=True)
class MarkdownChunk:
    """Prose between code fences.

    The content keeps its surrounding whitespace; blank spans are never
    turned into chunks in the first place.
    """

    content: str

    @property
    def type(self) -> ChunkType:
        return ChunkType.markdown

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type.value, "content": self.content}


@dataclass(frozen=True)
class CodeChunk:
    """A fenced ```{language} cell.

    RULES:
    - language: the text between the braces, trimmed (may be empty)
    - content: the fence body, trimmed
    """

    language: str
    content: str

    @property
    def type(self) -> ChunkType:
        return ChunkType.code

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "language": self.language,
            "content": self.content,
        }


Chunk = Union[MetadataChunk, MarkdownChunk, CodeChunk]


def has_executable_code(chunks: list[Chunk]) -> bool:
    """Return True if any chunk is a code cell, whatever its language."""
    return any(isinstance(chunk, CodeChunk) for chunk in chunks)


@dataclass
class Document:
    """A parsed document: ordered chunks plus the file they came from.

    WHY: Formatters need the chunks and the source filename (for output
    naming and JSON dumps), the same way the chunk list alone is enough
    for rendering.

    RULES:
    - chunks: exactly the list returned by the chunker, in order
    - source_filename: original document filename, e.g. "report.qmd"
    """

    chunks: list[Chunk] = field(default_factory=list)
    source_filename: str = ""

    @property
    def metadata(self) -> MetadataChunk | None:
        if self.chunks and isinstance(self.chunks[0], MetadataChunk):
            return self.chunks[0]
        return None

    @property
    def code_chunks(self) -> list[CodeChunk]:
        return [chunk for chunk in self.chunks if isinstance(chunk, CodeChunk)]

    @property
    def has_code(self) -> bool:
        return has_executable_code(self.chunks)
