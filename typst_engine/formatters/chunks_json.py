"""JSON dump of the parsed chunk list.

WHY: When a document renders unexpectedly, the first question is how
the engine split it. A JSON file of the chunks answers that without a
debugger, and other tools can consume it directly.

HOW: Serializes each chunk with ``to_dict()`` in document order under a
top-level object that also records the source filename.

RULES:
- Top level: {"source_filename": str, "chunks": [...]}
- Each chunk: {"type", "content"} plus "language" for code chunks
- Markdown content is stored untrimmed, exactly as parsed
- UTF-8, non-ASCII kept as-is, 2-space indent
- Output suffix: "-chunks.json"
- Media type: "application/json"
"""

from __future__ import annotations

import json

from typst_engine.core.chunks import Document
from typst_engine.formatters.base import BaseFormatter, FormatterOutput


class ChunksJsonFormatter(BaseFormatter):
    """Formatter that writes the chunk list as JSON."""

    @property
    def name(self) -> str:
        return "Chunks JSON"

    def format(self, document: Document) -> list[FormatterOutput]:
        payload = {
            "source_filename": document.source_filename,
            "chunks": [chunk.to_dict() for chunk in document.chunks],
        }
        content = json.dumps(payload, indent=2, ensure_ascii=False) + "\n"
        return [
            FormatterOutput(
                suffix="-chunks.json",
                content=content,
                media_type="application/json",
            )
        ]
