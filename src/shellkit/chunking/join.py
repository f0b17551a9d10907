"""Reassemble part files written by the chunker."""

from pathlib import Path

from ..core import config
from ..core.errors import ChunkIOError, InvalidInputError, NotFoundError
from ..core.logging import log
from .engine import detect_encoding
from .models import JoinResult
from .naming import parse_chunk_name


def find_parts(first_chunk: str | Path) -> list[Path]:
    """Return every sibling part of ``first_chunk`` ordered by index.

    Raises InvalidInputError if the name isn't a chunk name or the indices
    are not exactly 1..n.
    """
    chunk_path = Path(first_chunk).expanduser()
    if not chunk_path.exists():
        raise NotFoundError(f"Chunk file not found: {chunk_path}")
    if not chunk_path.is_file():
        raise InvalidInputError(f"Chunk path is not a regular file: {chunk_path}")

    parsed = parse_chunk_name(chunk_path.name)
    if parsed is None:
        raise InvalidInputError(
            f"Not a chunk file name: {chunk_path.name} (expected NAME_<size|part|char>_partNNNN.EXT)"
        )

    indexed: dict[int, Path] = {}
    for candidate in chunk_path.parent.iterdir():
        other = parse_chunk_name(candidate.name)
        if (
            other is None
            or not candidate.is_file()
            or other.base_name != parsed.base_name
            or other.strategy is not parsed.strategy
            or other.extension != parsed.extension
        ):
            continue
        if other.index < 1:
            raise InvalidInputError(f"Part indices start at 1: {candidate.name}")
        if other.index in indexed:
            raise InvalidInputError(
                f"Duplicate part index {other.index}: {indexed[other.index].name}, {candidate.name}"
            )
        indexed[other.index] = candidate

    for expected in range(1, len(indexed) + 1):
        if expected not in indexed:
            raise InvalidInputError(f"Missing part {expected} of {parsed.base_name}")

    return [indexed[i] for i in sorted(indexed)]


def join_chunks(
    first_chunk: str | Path, output: str | Path, encoding: str | None = None
) -> JoinResult:
    """Concatenate the parts of a split back into ``output``.

    Byte-mode parts are joined as raw bytes. Character-mode parts are decoded
    and re-encoded once so a byte-order mark is written at most once.
    ``encoding`` is the fallback for parts without a BOM.
    """
    parts = find_parts(first_chunk)
    out_path = Path(output).expanduser()
    resolved_parts = {p.resolve() for p in parts}
    if out_path.resolve() in resolved_parts:
        raise InvalidInputError(f"Output would overwrite one of its parts: {out_path}")
    if not out_path.parent.is_dir():
        raise InvalidInputError(f"Output directory does not exist: {out_path.parent}")

    parsed = parse_chunk_name(parts[0].name)
    if parsed is None:
        raise InvalidInputError(f"Not a chunk file name: {parts[0].name}")
    log.info("join.start", first=str(parts[0]), parts=len(parts), output=str(out_path))

    current = parts[0]
    try:
        if parsed.strategy.is_byte_oriented:
            with out_path.open("wb") as out:
                for current in parts:
                    with current.open("rb") as src:
                        while block := src.read(config.SETTINGS.COPY_BLOCK_SIZE):
                            out.write(block)
        else:
            text_encoding = detect_encoding(parts[0], encoding)
            with out_path.open("w", encoding=text_encoding, newline="") as out:
                for current in parts:
                    part_encoding = detect_encoding(current, text_encoding)
                    with current.open("r", encoding=part_encoding, newline="") as src:
                        out.write(src.read())
    except UnicodeError as e:
        raise ChunkIOError(f"Cannot decode {current}: {e}", path=str(current)) from e
    except OSError as e:
        raise ChunkIOError(f"I/O failure while joining {current}: {e}", path=str(current)) from e

    size = out_path.stat().st_size
    log.info("join.done", output=str(out_path), parts=len(parts), size_bytes=size)
    return JoinResult(output=out_path, parts=len(parts), size_bytes=size)
