"""Typst Engine: chunk-based conversion of Quarto documents for Typst output.

WHY: Quarto documents mix YAML frontmatter, prose, and fenced executable
cells. The Typst engine needs prose delivered as raw Typst passthrough
blocks while frontmatter and code cells stay intact. This package splits
a document into typed chunks and reassembles them in the target encoding.

HOW: Three-stage pipeline: parse (core chunker), check (extension policy),
render (serializer / pluggable formatters). Each stage is independently
testable and operates on plain strings and in-memory chunk records.

RULES:
- The chunk list is the stable contract between parsing and rendering
- Parsing never fails; malformed constructs degrade into markdown chunks
- Code chunks in plain markdown files are a usage error
"""

__version__ = "0.1.0"
