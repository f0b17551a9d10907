"""Output file naming for chunk files.

``{base}_{label}_part{index:04d}{extension}``; the index is padded to at
least four digits and grows past that when a split needs more parts.
"""

import re
from typing import NamedTuple

from .models import SplitStrategy

INDEX_WIDTH = 4

_CHUNK_NAME_RE = re.compile(
    r"^(?P<base>.+)_(?P<label>size|part|char)_part(?P<index>\d{4,})(?P<ext>\.[^.]*)?$"
)


class ChunkName(NamedTuple):
    base_name: str
    strategy: SplitStrategy
    index: int
    extension: str


def chunk_file_name(base_name: str, strategy: SplitStrategy, index: int, extension: str) -> str:
    return f"{base_name}_{strategy.label}_part{index:0{INDEX_WIDTH}d}{extension}"


def parse_chunk_name(name: str) -> ChunkName | None:
    """Split a chunk file name back into its parts, or None if it isn't one."""
    match = _CHUNK_NAME_RE.match(name)
    if match is None:
        return None
    return ChunkName(
        base_name=match["base"],
        strategy=SplitStrategy(match["label"]),
        index=int(match["index"]),
        extension=match["ext"] or "",
    )
