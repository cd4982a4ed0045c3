"""Converted Quarto document with prose as raw Typst blocks.

WHY: This is the engine's main product: the document Pandoc renders
when targeting Typst. Writing it to a file lets users inspect exactly
what the engine hands downstream.

HOW: Delegates to the core serializer with the configured raw format.

RULES:
- Output suffix: "-typst.qmd"
- Media type: "text/markdown"
"""

from __future__ import annotations

from typst_engine.core.chunks import Document
from typst_engine.core.serializer import render
from typst_engine.formatters.base import BaseFormatter, FormatterOutput


class TypstQmdFormatter(BaseFormatter):
    """Formatter that re-renders the document with raw prose blocks."""

    @property
    def name(self) -> str:
        return "Typst Quarto"

    def format(self, document: Document) -> list[FormatterOutput]:
        return [
            FormatterOutput(
                suffix="-{}.qmd".format(self.raw_format),
                content=render(document.chunks, self.raw_format),
                media_type="text/markdown",
            )
        ]
