"""Split a raw Quarto document into an ordered list of chunks.

WHY: The engine must re-encode prose while leaving frontmatter and code
cells untouched, and must know whether a document contains executable
cells at all. Both need the document cut into typed pieces in order.

HOW: Two stages. tokenize() walks the text once, left to right, using
plain substring searches (no backtracking regex), and yields a flat
stream of events:
  FRONTMATTER  — body of a leading --- ... --- block
  TEXT         — a span of prose between fences (possibly blank)
  FENCE_OPEN   — the info string of a ```{...} fence
  FENCE_CLOSE  — the body of that fence, up to the next ```
parse() reduces that stream into MetadataChunk / MarkdownChunk /
CodeChunk records.

RULES:
- Frontmatter is only recognized at the very start of the text
- The opening and closing delimiter lines are "---" plus optional
  trailing whitespace; the body between them may be empty
- Fences are matched first-come: ```{info} then the shortest body up
  to the next ``` (nested or quoted backticks are not special)
- Blank TEXT spans produce no chunk; non-blank ones keep their
  whitespace
- Code language and content are trimmed
- Never raises: unterminated fences or frontmatter fall through as prose
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Tuple

from typst_engine.core.chunks import Chunk, CodeChunk, MarkdownChunk, MetadataChunk

FRONTMATTER_DELIMITER = "---"
FENCE = "```"
FENCE_OPEN = "```{"
INFO_CLOSE = "}"


class TokenKind(str, Enum):
    frontmatter = "frontmatter"
    text = "text"
    fence_open = "fence_open"
    fence_close = "fence_close"


@dataclass(frozen=True)
class Token:
    """One scanner event.

    Attributes:
        kind: Event type.
        text: Frontmatter body, prose span, fence info string, or fence
              body depending on ``kind``. Never trimmed by the scanner.
        offset: Character offset of the event in the raw document.
    """

    kind: TokenKind
    text: str
    offset: int


def _scan_frontmatter(raw: str) -> Optional[Tuple[str, int]]:
    """Locate a leading frontmatter block.

    Returns:
        (body, end) where ``end`` is the offset just past the closing
        ``---``, or None when the document has no complete block.
    """
    first_newline = raw.find("\n")
    if first_newline == -1 or raw[:first_newline].rstrip() != FRONTMATTER_DELIMITER:
        return None

    body_start = first_newline + 1
    line_start = body_start
    while line_start <= len(raw):
        line_end = raw.find("\n", line_start)
        if line_end == -1:
            line_end = len(raw)
        if raw[line_start:line_end].rstrip() == FRONTMATTER_DELIMITER:
            # The newline before the closing line belongs to the delimiter
            body = raw[body_start:line_start - 1] if line_start > body_start else ""
            return body, line_start + len(FRONTMATTER_DELIMITER)
        line_start = line_end + 1
    return None


def tokenize(raw: str) -> Iterator[Token]:
    """Scan ``raw`` once and yield frontmatter, text, and fence events.

    WHY: A flat event stream keeps the scanning rules (where things start
    and end) apart from the chunk-building rules (what gets kept and how
    it is trimmed).

    HOW: Frontmatter is checked once at offset 0. Fences are then found
    with str.find: the next ```{, the first } after it, and
    the first ``` after that. If any of the three is missing, no later
    fence can complete either, so the rest of the text is one TEXT span.

    RULES:
    - Every character after the frontmatter is covered by exactly one
      TEXT, FENCE_OPEN, or FENCE_CLOSE payload or by fence syntax
    - A TEXT event is always emitted before each fence and once at the
      end, even when empty
    """
    cursor = 0
    frontmatter = _scan_frontmatter(raw)
    if frontmatter is not None:
        body, cursor = frontmatter
        yield Token(TokenKind.frontmatter, body, 0)

    while True:
        open_at = raw.find(FENCE_OPEN, cursor)
        if open_at == -1:
            break
        info_start = open_at + len(FENCE_OPEN)
        info_end = raw.find(INFO_CLOSE, info_start)
        if info_end == -1:
            break
        body_start = info_end + len(INFO_CLOSE)
        close_at = raw.find(FENCE, body_start)
        if close_at == -1:
            break

        yield Token(TokenKind.text, raw[cursor:open_at], cursor)
        yield Token(TokenKind.fence_open, raw[info_start:info_end], open_at)
        yield Token(TokenKind.fence_close, raw[body_start:close_at], close_at)
        cursor = close_at + len(FENCE)

    yield Token(TokenKind.text, raw[cursor:], cursor)


def parse(raw: str) -> list[Chunk]:
    """Parse a Quarto document into chunks, preserving the original order.

    Args:
        raw: The full document text.

    Returns:
        Metadata, markdown, and code chunks in document order. Empty
        input gives an empty list.
    """
    chunks: list[Chunk] = []
    language = ""

    for token in tokenize(raw):
        if token.kind is TokenKind.frontmatter:
            chunks.append(MetadataChunk(content=token.text))
        elif token.kind is TokenKind.text:
            if token.text.strip():
                chunks.append(MarkdownChunk(content=token.text))
        elif token.kind is TokenKind.fence_open:
            language = token.text.strip()
        else:
            chunks.append(CodeChunk(language=language, content=token.text.strip()))

    return chunks
