"""Typst execution engine: descriptor record and stateless operations.

WHY: A document host (Quarto) discovers engines through a descriptor
(name, extensions, which files it claims) and then calls the engine to
build an execution target and to execute it. The engine itself has no
state worth keeping between calls, so a single configuration record and
a handful of plain functions cover both sides.

HOW: EngineConfig carries the descriptor fields. The host's file and
YAML services are passed in explicitly as a HostAPI object (LocalHost is
the filesystem + PyYAML implementation used by the CLI and tests).
execute() parses the target's markdown into chunks and execute_chunks()
enforces the extension policy and re-renders them with prose as raw Typst.

RULES:
- No module-level host handle: every operation receives what it needs
- Boundary records (targets, results) are pydantic models
- .md/.markdown files are claimed; no code language is claimed
- Executable code in a .md/.markdown file raises UsageError
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

import yaml
from pydantic import BaseModel, Field

from typst_engine.config import (
    DEFAULT_EXT,
    DEFAULT_RAW_FORMAT,
    ENGINE_NAME,
    MD_EXTENSIONS,
    QMD_EXTENSIONS,
    load_raw_format,
)
from typst_engine.core.chunker import TokenKind, parse, tokenize
from typst_engine.core.chunks import Chunk
from typst_engine.core.policy import check_executable_extension
from typst_engine.core.serializer import render

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Descriptor
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EngineConfig:
    """Everything the host needs to know about the engine before using it.

    RULES:
    - raw_format is the tag written into ```{=...} prose blocks
    - raw_format is validated on construction (ValueError if malformed)
    - valid_extensions() is executable + non-executable, sorted
    - claims_file() claims plain markdown only; .qmd files are claimed
      by the host's own markdown engine unless the document asks for us
    """

    name: str = ENGINE_NAME
    default_ext: str = DEFAULT_EXT
    default_yaml: List[str] = field(default_factory=list)
    default_content: List[str] = field(default_factory=list)
    raw_format: str = DEFAULT_RAW_FORMAT
    executable_extensions: frozenset = QMD_EXTENSIONS
    non_executable_extensions: frozenset = MD_EXTENSIONS
    can_freeze: bool = False
    generates_figures: bool = False

    def __post_init__(self) -> None:
        # Frozen: normalize the validated tag in place
        object.__setattr__(self, "raw_format", load_raw_format(self.raw_format))

    def valid_extensions(self) -> List[str]:
        return sorted(self.executable_extensions) + sorted(self.non_executable_extensions)

    def claims_file(self, file: str, ext: str) -> bool:
        return ext.lower() in self.non_executable_extensions

    def claims_language(self, language: str) -> bool:
        return False


# ---------------------------------------------------------------------------
# Host services
# ---------------------------------------------------------------------------


class HostAPI(Protocol):
    """File and YAML services provided by the document host."""

    def read_text(self, path: str) -> str:
        ...

    def extract_yaml(self, markdown: str) -> Dict[str, Any]:
        ...


class LocalHost:
    """HostAPI backed by the local filesystem and PyYAML."""

    def read_text(self, path: str) -> str:
        return Path(path).read_text(encoding="utf-8")

    def extract_yaml(self, markdown: str) -> Dict[str, Any]:
        """Load the frontmatter block as a dict.

        Missing frontmatter gives {}. Malformed YAML also gives {} and a
        warning; validating the YAML is left to the host's own tools.
        Only the leading frontmatter is scanned, not the whole body.
        """
        first = next(tokenize(markdown))
        if first.kind is not TokenKind.frontmatter:
            return {}
        try:
            data = yaml.safe_load(first.text)
        except yaml.YAMLError as e:
            logger.warning("Ignoring malformed YAML frontmatter: %s", e)
            return {}
        return data if isinstance(data, dict) else {}


# ---------------------------------------------------------------------------
# Boundary models
# ---------------------------------------------------------------------------


class ExecutionTarget(BaseModel):
    """A document prepared for execution."""

    source: str = Field(description="Path of the source document.")
    input: str = Field(description="Path of the file being executed.")
    markdown: str = Field(description="Full document text.")
    metadata: Dict[str, Any] = Field(
        default_factory=dict,
        description="Parsed YAML frontmatter.",
    )


class PartitionedMarkdown(BaseModel):
    """A document split into its frontmatter and its body."""

    yaml: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Parsed frontmatter, or None when the document has none.",
    )
    markdown: str = Field(description="Full document text.")
    src_markdown_no_yaml: str = Field(
        description="Document text after the frontmatter block.",
    )


class ExecuteResult(BaseModel):
    """Output of execute(): the converted document for downstream rendering."""

    engine: str
    markdown: str
    supporting: List[str] = Field(default_factory=list)
    filters: List[str] = Field(default_factory=list)


class DependenciesResult(BaseModel):
    includes: Dict[str, Any] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------


def markdown_for_file(host: HostAPI, file: str) -> str:
    """Read a document's text through the host."""
    return host.read_text(file)


def target(host: HostAPI, file: str, markdown: Optional[str] = None) -> ExecutionTarget:
    """Create an execution target for a file.

    Args:
        host: Host services used to read the file and its frontmatter.
        file: Document path.
        markdown: Already loaded document text; read from ``file`` if None.

    Returns:
        ExecutionTarget with source and input both set to ``file``.
    """
    if markdown is None:
        markdown = markdown_for_file(host, file)
    metadata = host.extract_yaml(markdown)
    return ExecutionTarget(source=file, input=file, markdown=markdown, metadata=metadata)


def partitioned_markdown(host: HostAPI, file: str) -> PartitionedMarkdown:
    """Split a document into parsed frontmatter and the remaining text.

    WHY: The host inspects frontmatter (title, format options) separately
    from the body, e.g. to decide which engine should handle the file.

    HOW: Uses the chunker's frontmatter scan so the boundary is the same
    one execute() will later use.
    """
    markdown = markdown_for_file(host, file)
    tokens = tokenize(markdown)
    first = next(tokens)
    if first.kind is TokenKind.frontmatter:
        # The token after the frontmatter starts where the body starts
        body_start = next(tokens).offset
        return PartitionedMarkdown(
            yaml=host.extract_yaml(markdown),
            markdown=markdown,
            src_markdown_no_yaml=markdown[body_start:],
        )
    return PartitionedMarkdown(yaml=None, markdown=markdown, src_markdown_no_yaml=markdown)


def execute(config: EngineConfig, execution_target: ExecutionTarget) -> ExecuteResult:
    """Convert a document so its prose is passed through as raw Typst.

    WHY: This is where the Typst transformation happens. Pandoc receives
    code cells and frontmatter as usual, and every prose span wrapped in
    a ```{=typst} block.

    HOW: Parse the target's markdown into chunks, then hand them to
    execute_chunks().

    RULES:
    - The policy check runs before any rendering
    - supporting and filters are always empty

    Raises:
        UsageError: If ``execution_target.input`` is a non-executable
            extension and the document contains a code chunk.
    """
    chunks = parse(execution_target.markdown)
    logger.debug("Parsed chunks: %s", chunks)
    return execute_chunks(config, execution_target.input, chunks)


def execute_chunks(config: EngineConfig, input: str, chunks: List[Chunk]) -> ExecuteResult:
    """Apply the extension policy to parsed chunks and render them.

    Callers that already hold the chunk list (the CLI feeds the same list
    to its formatters) use this to avoid parsing the document twice.

    Args:
        config: Engine descriptor; supplies the raw format and extension table.
        input: Path of the file being executed, checked against the policy.
        chunks: Chunks of that file, in document order.

    Raises:
        UsageError: If ``input`` has a non-executable extension and
            ``chunks`` contains a code chunk.
    """
    check_executable_extension(input, chunks, config.non_executable_extensions)

    markdown = render(chunks, config.raw_format)
    logger.info(
        "Converted %s (%d chunks) for %s output",
        input, len(chunks), config.raw_format,
    )
    return ExecuteResult(engine=config.name, markdown=markdown, supporting=[], filters=[])


def dependencies(config: EngineConfig) -> DependenciesResult:
    """The engine adds no includes to the rendered document."""
    return DependenciesResult(includes={})


def postprocess(config: EngineConfig) -> None:
    """Nothing to postprocess."""
    return None
