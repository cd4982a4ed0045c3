"""Shared test fixtures for the typst_engine test suite.

WHY: Several test modules need the same representative documents: one
with frontmatter, prose, and code cells, and plain markdown variants.
Centralizing them here keeps the expected chunk lists in one place.

HOW: Pytest fixtures provide raw document strings, the chunk list the
chunker must produce for the mixed document, and a helper that writes
a document into tmp_path.

RULES:
- SAMPLE_QMD's expected chunks are written out by hand, not computed
- Markdown chunk contents are untrimmed, exactly as the chunker keeps them
"""

import pytest

from typst_engine.core.chunks import CodeChunk, MarkdownChunk, MetadataChunk


SAMPLE_QMD = (
    "---\n"
    "title: Report\n"
    "format: typst\n"
    "---\n"
    "\n"
    "# Introduction\n"
    "\n"
    "Some *prose*.\n"
    "\n"
    "```{python}\n"
    "x = 1 + 1\n"
    "print(x)\n"
    "```\n"
    "\n"
    "More prose.\n"
)

SAMPLE_QMD_CHUNKS = [
    MetadataChunk(content="title: Report\nformat: typst"),
    MarkdownChunk(content="\n\n# Introduction\n\nSome *prose*.\n\n"),
    CodeChunk(language="python", content="x = 1 + 1\nprint(x)"),
    MarkdownChunk(content="\n\nMore prose.\n"),
]

PLAIN_MD = (
    "---\n"
    "title: Notes\n"
    "---\n"
    "\n"
    "Just text, with a `code span` and\n"
    "\n"
    "```python\n"
    "not_executed()\n"
    "```\n"
)


@pytest.fixture
def sample_qmd():
    return SAMPLE_QMD


@pytest.fixture
def sample_qmd_chunks():
    return list(SAMPLE_QMD_CHUNKS)


@pytest.fixture
def plain_md():
    return PLAIN_MD


@pytest.fixture
def write_doc(tmp_path):
    """Write ``text`` to ``tmp_path / name`` and return the path."""

    def _write(name, text):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
