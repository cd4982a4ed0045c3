"""Core chunking, rendering, and policy modules.

WHY: The core package contains the stable heart of the engine: the
chunk dataclasses, the chunker that builds them from raw text, and the
serializer that turns them back into a document. These are consumed by
the engine operations, the formatters, and the CLI.

HOW: chunks.py defines the data structures, chunker.py builds them from
a raw document string, serializer.py re-encodes them, policy.py decides
whether a document's extension allows executable code.

RULES:
- Chunk dataclasses are the contract; change with care
- Everything in core is pure: no file I/O, no global state
"""
