"""Unit tests for all formatter modules.

WHY: Formatters are what the CLI writes to disk. A wrong suffix
overwrites the wrong file; invalid JSON breaks every tool reading it.

HOW: Tests run each formatter on the sample document:
  - Typst Quarto: rendered content, suffix derived from the raw format
  - Chunks JSON: schema validation, chunk order, untrimmed content

RULES:
- Schema validation uses chunks_schema.json at the repository root
"""

import json
from pathlib import Path

import jsonschema
import pytest

from typst_engine.core.chunker import parse
from typst_engine.core.chunks import Document
from typst_engine.core.serializer import render
from typst_engine.formatters import FORMATTERS
from typst_engine.formatters.base import BaseFormatter
from typst_engine.formatters.chunks_json import ChunksJsonFormatter
from typst_engine.formatters.typst_qmd import TypstQmdFormatter

SCHEMA_PATH = Path(__file__).resolve().parent.parent / "chunks_schema.json"


def _load_schema():
    with open(SCHEMA_PATH) as f:
        return json.load(f)


def _document(text, filename="report.qmd"):
    return Document(chunks=parse(text), source_filename=filename)


class TestRegistry:

    def test_keys(self):
        assert set(FORMATTERS) == {"typst_qmd", "chunks_json"}

    def test_values_are_formatter_classes(self):
        for cls in FORMATTERS.values():
            assert issubclass(cls, BaseFormatter)
            assert cls().name


class TestTypstQmdFormatter:

    def test_single_output(self, sample_qmd):
        outputs = TypstQmdFormatter().format(_document(sample_qmd))
        assert len(outputs) == 1
        assert outputs[0].suffix == "-typst.qmd"
        assert outputs[0].media_type == "text/markdown"
        assert outputs[0].content == render(parse(sample_qmd), "typst")

    def test_raw_format_in_suffix_and_content(self):
        outputs = TypstQmdFormatter(raw_format="html").format(_document("hi"))
        assert outputs[0].suffix == "-html.qmd"
        assert outputs[0].content == "```{=html}\nhi\n```\n\n"

    def test_empty_document(self):
        assert TypstQmdFormatter().format(Document())[0].content == ""

    def test_malformed_raw_format_rejected(self):
        with pytest.raises(ValueError, match="Invalid raw format"):
            TypstQmdFormatter(raw_format="two words")
        with pytest.raises(ValueError):
            ChunksJsonFormatter(raw_format="")


class TestChunksJsonFormatter:

    def test_valid_against_schema(self, sample_qmd):
        output = ChunksJsonFormatter().format(_document(sample_qmd))[0]
        jsonschema.validate(json.loads(output.content), _load_schema())

    def test_payload(self, sample_qmd, sample_qmd_chunks):
        output = ChunksJsonFormatter().format(_document(sample_qmd))[0]
        data = json.loads(output.content)
        assert output.suffix == "-chunks.json"
        assert output.media_type == "application/json"
        assert data["source_filename"] == "report.qmd"
        assert data["chunks"] == [c.to_dict() for c in sample_qmd_chunks]

    def test_code_chunk_fields(self):
        data = json.loads(ChunksJsonFormatter().format(_document("```{r}\n1\n```"))[0].content)
        assert data["chunks"] == [{"type": "code", "language": "r", "content": "1"}]

    def test_non_ascii_kept(self):
        output = ChunksJsonFormatter().format(_document("Ärende — klart\n"))[0]
        assert "Ärende — klart" in output.content

    def test_empty_document_valid(self):
        output = ChunksJsonFormatter().format(Document(source_filename="x.md"))[0]
        data = json.loads(output.content)
        jsonschema.validate(data, _load_schema())
        assert data["chunks"] == []
