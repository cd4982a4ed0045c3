"""Command-line interface for the Typst engine.

WHY: Users need a simple way to see what the engine does to a document
without running a full Quarto render. The CLI wires together the whole
pipeline (file validation, chunking, the extension policy check,
pluggable formatter output, and file saving) behind a single command.

HOW: Uses argparse to accept an input document, output format selection,
the raw format tag, and an output directory. Builds an execution target
through LocalHost, parses it once, and runs engine.execute_chunks()
(which applies the policy check) and the selected formatters over the
same chunks.
Status messages go to stderr; output files are saved next to the source
(or to --output-dir), or the converted document is printed to stdout
with --stdout.

RULES:
- Positional argument: input document path
- Validates the extension against the engine's valid extensions
- Code cells in .md/.markdown files abort with the usage error message
- --formats: comma-separated formatter keys (default: all registered)
- Output naming: {stem}{suffix}, numeric suffix for conflicts (-typst-2.qmd)
- Status output goes to stderr (not stdout)
- Exit code 1 on any error, 0 on success
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from typst_engine import engine
from typst_engine.config import load_log_level, load_raw_format
from typst_engine.core.chunker import parse
from typst_engine.core.chunks import Document
from typst_engine.core.policy import UsageError
from typst_engine.formatters import FORMATTERS
from typst_engine.formatters.base import FormatterOutput


def _status(msg: str) -> None:
    """Print a status message to stderr.

    Status output must not pollute stdout so --stdout can be piped.
    """
    print(msg, file=sys.stderr, flush=True)


def _fail(msg: str) -> None:
    print("Error: {}".format(msg), file=sys.stderr)
    sys.exit(1)


def _resolve_output_path(
    stem: str,
    suffix: str,
    output_dir: Path,
) -> Path:
    """Resolve the output file path, adding numeric suffix on conflict.

    WHY: Users may run the converter multiple times on the same file.
    Overwriting previous output would lose work. Numeric suffixes
    (-typst-2.qmd) prevent data loss.

    HOW: Check if {stem}{suffix} exists. If so, increment a counter
    and insert it before the file extension until a free name is found.

    RULES:
    - First attempt: {stem}{suffix} (e.g. report-typst.qmd)
    - Conflict: split suffix at last dot, insert counter before extension
      (e.g. report-typst-2.qmd)
    - Counter starts at 2 and increments

    Args:
        stem: Source filename stem (without extension).
        suffix: Formatter's suffix (e.g. "-typst.qmd").
        output_dir: Directory to save the output file.

    Returns:
        A Path that does not yet exist.
    """
    base_path = output_dir / "{}{}".format(stem, suffix)
    if not base_path.exists():
        return base_path

    dot_idx = suffix.rfind(".")
    if dot_idx > 0:
        suffix_name = suffix[:dot_idx]
        suffix_ext = suffix[dot_idx:]
    else:
        suffix_name = suffix
        suffix_ext = ""

    counter = 2
    while True:
        candidate = output_dir / "{}{}-{}{}".format(stem, suffix_name, counter, suffix_ext)
        if not candidate.exists():
            return candidate
        counter += 1


def _save_output(
    output: FormatterOutput,
    stem: str,
    output_dir: Path,
) -> Path:
    """Write one formatter output as UTF-8 and return where it went."""
    path = _resolve_output_path(stem, output.suffix, output_dir)
    path.write_text(output.content, encoding="utf-8")
    return path


def _select_formats(formats: Optional[str]) -> List[str]:
    """Turn the --formats value into formatter keys, failing on unknown keys."""
    if not formats:
        return list(FORMATTERS.keys())

    keys = [f.strip() for f in formats.split(",") if f.strip()]
    for key in keys:
        if key not in FORMATTERS:
            available = ", ".join(sorted(FORMATTERS.keys()))
            _fail("Unknown format '{}'. Available formats: {}".format(key, available))
    return keys


def _run_pipeline(args: argparse.Namespace) -> None:
    """Execute the full conversion pipeline.

    RULES:
    - Validate file and extension before reading
    - Policy check runs before any output is written
    - Status messages to stderr at each step
    """
    input_path = Path(args.input_file).resolve()

    if not input_path.is_file():
        _fail("File not found: {}".format(input_path))

    try:
        raw_format = load_raw_format(args.raw_format)
    except ValueError as e:
        _fail(str(e))

    config = engine.EngineConfig(raw_format=raw_format)

    ext = input_path.suffix.lower()
    if ext not in config.valid_extensions():
        _fail("Unsupported file type '{}'. Supported extensions: {}".format(
            ext, ", ".join(config.valid_extensions()),
        ))

    output_dir = Path(args.output_dir).resolve() if args.output_dir else input_path.parent
    if not args.stdout and not output_dir.is_dir():
        _fail("Output directory does not exist: {}".format(output_dir))

    format_keys = _select_formats(args.formats)

    _status("Reading {}...".format(input_path.name))
    try:
        execution_target = engine.target(engine.LocalHost(), str(input_path))
    except (OSError, UnicodeDecodeError) as e:
        _fail("Could not read {}: {}".format(input_path, e))

    document = Document(chunks=parse(execution_target.markdown), source_filename=input_path.name)
    _status("  Parsed {} chunks ({} code)".format(
        len(document.chunks), len(document.code_chunks),
    ))

    try:
        result = engine.execute_chunks(config, execution_target.input, document.chunks)
    except UsageError as e:
        _fail(str(e))

    if args.stdout:
        sys.stdout.write(result.markdown)
        return

    _status("Formatting output...")
    saved_files: List[Path] = []
    for key in format_keys:
        formatter = FORMATTERS[key](raw_format=raw_format)
        _status("  Running {} formatter...".format(formatter.name))
        for output in formatter.format(document):
            try:
                saved_path = _save_output(output, input_path.stem, output_dir)
            except OSError as e:
                _fail("Could not write output: {}".format(e))
            saved_files.append(saved_path)
            _status("  Saved: {}".format(saved_path.name))

    _status("")
    _status("Done! Saved {} file(s) to {}".format(len(saved_files), output_dir))


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    Separate from main() so tests can inspect the parser without running
    the pipeline.
    """
    parser = argparse.ArgumentParser(
        prog="typst_engine",
        description="Split a Quarto document into chunks and re-render its prose "
                    "as raw Typst blocks.",
    )

    parser.add_argument(
        "input_file",
        help="Path to the .qmd, .md, or .markdown document.",
    )

    parser.add_argument(
        "--formats",
        default=None,
        help="Comma-separated list of output formats. "
             "Available: {}. Default: all.".format(", ".join(sorted(FORMATTERS.keys()))),
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory to save output files (default: same as input file).",
    )

    parser.add_argument(
        "--raw-format",
        default=None,
        help="Raw block format tag for prose chunks "
             "(default: TYPST_ENGINE_RAW_FORMAT or 'typst').",
    )

    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print the converted document to stdout instead of saving files.",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - An invalid TYPST_ENGINE_LOG_LEVEL is an error (exit 1), even with -v
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        level = load_log_level()
    except ValueError as e:
        _fail(str(e))

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    _run_pipeline(args)


if __name__ == "__main__":
    main()
