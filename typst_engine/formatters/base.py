"""Abstract base formatter and output container.

WHY: Every output format consumes the same parsed Document but produces
different file content. This base class enforces a consistent interface
so the CLI and any host integration can work with any formatter
generically.

HOW: BaseFormatter is an ABC with two requirements: a ``name`` property
and a ``format()`` method. FormatterOutput is a plain dataclass that
bundles a file suffix with its content and MIME type.

RULES:
- Subclasses MUST implement ``name`` (human-readable) and ``format()``
- ``format()`` returns a list, even for single-file formats
- ``suffix`` starts with a hyphen, e.g. ``"-typst.qmd"``
- The caller is responsible for prepending the source filename stem
- Every formatter accepts the raw format tag, whether or not it uses it
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from typst_engine.config import DEFAULT_RAW_FORMAT, load_raw_format
from typst_engine.core.chunks import Document


@dataclass
class FormatterOutput:
    """One output file produced by a formatter.

    Attributes:
        suffix: File suffix appended to the source stem,
                e.g. ``"-typst.qmd"`` → ``"report-typst.qmd"``.
        content: The file content.
        media_type: MIME type for the content, e.g. ``"application/json"``.
    """

    suffix: str
    content: str
    media_type: str


class BaseFormatter(ABC):
    """Abstract base for all output formatters.

    To add a new output format:
    1. Create a new file in formatters/
    2. Subclass BaseFormatter
    3. Implement format() and name
    4. Register in FORMATTERS dict in formatters/__init__.py
    """

    def __init__(self, raw_format: str = DEFAULT_RAW_FORMAT) -> None:
        self.raw_format = load_raw_format(raw_format)

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'Typst Quarto'."""

    @abstractmethod
    def format(self, document: Document) -> list[FormatterOutput]:
        """Convert the parsed document into one or more output files.

        Args:
            document: Ordered chunks and the source filename.

        Returns:
            List of FormatterOutput objects.
        """
