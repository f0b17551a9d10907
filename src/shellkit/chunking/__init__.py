"""
File chunking: split one file into ordered parts and join them back.

Three mutually exclusive strategies are supported:
- by byte size (``size`` label)
- by part count, with the per-part size rounded up (``part`` label)
- by character count, never splitting a multi-byte character (``char`` label)
"""

from .engine import chunk_file, detect_encoding
from .join import find_parts, join_chunks
from .models import (
    ChunkDescriptor,
    ChunkingResult,
    JoinResult,
    SourceFile,
    SplitPlan,
    SplitStrategy,
)
from .naming import chunk_file_name, parse_chunk_name
from .sizes import parse_size

__all__ = [
    "ChunkDescriptor",
    "ChunkingResult",
    "JoinResult",
    "SourceFile",
    "SplitPlan",
    "SplitStrategy",
    "chunk_file",
    "chunk_file_name",
    "detect_encoding",
    "find_parts",
    "join_chunks",
    "parse_chunk_name",
    "parse_size",
]
