"""Output formatter registry.

WHY: The CLI needs a single lookup to find the right formatter by name.
A central dict makes it trivial to add new formats: create the formatter
class, import it here, add one line.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed: ``formatter = FORMATTERS["typst_qmd"]()``.

RULES:
- Keys are snake_case identifiers (used in the --formats CLI flag)
- Values are BaseFormatter subclasses (not instances)
- Every formatter listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from typst_engine.formatters.chunks_json import ChunksJsonFormatter
from typst_engine.formatters.typst_qmd import TypstQmdFormatter

if TYPE_CHECKING:
    from typst_engine.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "typst_qmd": TypstQmdFormatter,
    "chunks_json": ChunksJsonFormatter,
}
