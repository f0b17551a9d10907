"""
File chunking engine: split one source file into ordered part files.

Byte-oriented strategies (by size, by part count) share one streaming copy
loop; the character strategy reads decoded text so that multi-byte
characters never straddle a chunk boundary.
"""

from __future__ import annotations

import codecs
import math
from pathlib import Path
from typing import BinaryIO, Callable, Optional

from ..core import config
from ..core.errors import ChunkIOError, InvalidInputError, NotFoundError
from ..core.logging import log
from .models import ChunkDescriptor, ChunkingResult, SourceFile, SplitPlan, SplitStrategy
from .naming import chunk_file_name, parse_chunk_name

ChunkCallback = Callable[[ChunkDescriptor], None]

# Longest BOMs first so UTF-32 LE isn't mistaken for UTF-16 LE
_BOMS = [
    (codecs.BOM_UTF32_LE, "utf-32"),
    (codecs.BOM_UTF32_BE, "utf-32"),
    (codecs.BOM_UTF8, "utf-8-sig"),
    (codecs.BOM_UTF16_LE, "utf-16"),
    (codecs.BOM_UTF16_BE, "utf-16"),
]


def detect_encoding(path: Path, default: Optional[str] = None) -> str:
    """Pick the text encoding of ``path`` from its byte-order mark.

    Files without a BOM use ``default`` (or the configured TEXT_ENCODING).
    """
    with path.open("rb") as f:
        head = f.read(4)
    for bom, encoding in _BOMS:
        if head.startswith(bom):
            return encoding
    encoding = default or config.SETTINGS.TEXT_ENCODING
    try:
        codecs.lookup(encoding)
    except LookupError as e:
        raise InvalidInputError(f"Unknown text encoding: {encoding}") from e
    return encoding


def resolve_source(path: str | Path) -> Path:
    source = Path(path).expanduser()
    if not source.exists():
        raise NotFoundError(f"Source file not found: {source}")
    if not source.is_file():
        raise InvalidInputError(f"Source is not a regular file: {source}")
    return source


def resolve_destination(source: Path, destination: str | Path | None) -> Path:
    if destination is None:
        return source.resolve().parent
    dest = Path(destination).expanduser()
    if not dest.is_dir():
        raise InvalidInputError(f"Destination directory does not exist: {dest}")
    return dest


def bytes_per_chunk(plan: SplitPlan, total_bytes: int) -> int:
    """Chunk size for the byte-oriented strategies.

    By part count the size is rounded up, so fewer parts than requested can
    come out when the division isn't exact (9 bytes / 4 parts -> 3 x 3).
    """
    if plan.strategy is SplitStrategy.BY_BYTE_SIZE:
        return plan.value
    if plan.strategy is SplitStrategy.BY_PART_COUNT:
        return max(1, math.ceil(total_bytes / plan.value))
    raise ValueError(f"{plan.strategy} is not byte-oriented")


def chunk_file(
    path: str | Path,
    plan: SplitPlan,
    destination: str | Path | None = None,
    base_name: Optional[str] = None,
    encoding: Optional[str] = None,
    on_chunk: Optional[ChunkCallback] = None,
) -> ChunkingResult:
    """
    Split ``path`` into part files according to ``plan``.

    Args:
        path: Source file; must exist and be a regular file.
        plan: Strategy plus its positive parameter (see SplitPlan.from_options).
        destination: Output directory, defaults to the source's directory.
        base_name: Output name prefix, defaults to the source name without extension.
        encoding: Text encoding for character mode when the file has no BOM.
        on_chunk: Called with each descriptor after its file is closed.

    Returns:
        ChunkingResult listing every part written, in index order.

    Raises:
        NotFoundError: the source does not exist.
        InvalidInputError: bad source, destination or encoding; nothing written.
        ChunkIOError: read/write failure; parts written so far are kept.
    """
    if plan.value <= 0:
        raise InvalidInputError(f"Split value must be greater than zero (got {plan.value})")
    source_path = resolve_source(path)
    dest = resolve_destination(source_path, destination)
    base = base_name or source_path.stem
    if not base or "/" in base or "\\" in base:
        raise InvalidInputError(f"Invalid base name: {base!r}")
    extension = source_path.suffix
    if _is_own_part(source_path, dest, base, plan.strategy, extension):
        raise InvalidInputError(
            f"Source {source_path.name} would be overwritten by its own parts; "
            "choose another base name or destination"
        )

    size_bytes = source_path.stat().st_size
    text_encoding = None
    if not plan.strategy.is_byte_oriented:
        text_encoding = detect_encoding(source_path, encoding)

    source = SourceFile(path=source_path, size_bytes=size_bytes, encoding=text_encoding)
    result = ChunkingResult(source=source, destination=dest, strategy=plan.strategy)

    def target_for(index: int) -> Path:
        return dest / chunk_file_name(base, plan.strategy, index, extension)

    def record(descriptor: ChunkDescriptor) -> None:
        result.chunks.append(descriptor)
        log.info(
            "chunk.written",
            path=str(descriptor.path),
            index=descriptor.index,
            size=descriptor.size,
            unit=descriptor.unit,
        )
        if on_chunk is not None:
            on_chunk(descriptor)

    log.info(
        "chunk.start",
        source=str(source_path),
        size_bytes=size_bytes,
        strategy=plan.strategy.label,
        value=plan.value,
        destination=str(dest),
    )

    if text_encoding is None:
        chunk_size = bytes_per_chunk(plan, size_bytes)
        _split_bytes(source_path, chunk_size, target_for, record)
    else:
        _split_chars(source_path, plan.value, text_encoding, target_for, record)

    log.info("chunk.done", source=str(source_path), parts=result.count, destination=str(dest))
    return result


def _is_own_part(
    source_path: Path, dest: Path, base: str, strategy: SplitStrategy, extension: str
) -> bool:
    """True when ``source_path`` is named like one of the parts about to be written."""
    parsed = parse_chunk_name(source_path.name)
    if parsed is None or parsed.index < 1:
        return False
    return (
        parsed.base_name == base
        and parsed.strategy is strategy
        and parsed.extension == extension
        and dest.resolve() == source_path.resolve().parent
    )


def _copy_block(src: BinaryIO, dst: BinaryIO, limit: int, block_size: int) -> int:
    """Copy up to ``limit`` bytes in bounded reads; returns bytes copied."""
    copied = 0
    while copied < limit:
        block = src.read(min(block_size, limit - copied))
        if not block:
            break
        dst.write(block)
        copied += len(block)
    return copied


def _split_bytes(
    source_path: Path,
    chunk_size: int,
    target_for: Callable[[int], Path],
    record: ChunkCallback,
) -> None:
    block_size = config.SETTINGS.COPY_BLOCK_SIZE
    index = 0
    try:
        with source_path.open("rb") as src:
            while True:
                # Peek one block so no empty trailing part is created at EOF
                first = src.read(min(block_size, chunk_size))
                if not first:
                    break
                index += 1
                target = target_for(index)
                with target.open("wb") as out:
                    out.write(first)
                    written = len(first) + _copy_block(
                        src, out, chunk_size - len(first), block_size
                    )
                record(
                    ChunkDescriptor(
                        path=target,
                        index=index,
                        size=written,
                        unit="bytes",
                        bytes_written=written,
                    )
                )
    except OSError as e:
        failed = str(target_for(index)) if index else str(source_path)
        log.error("chunk.io_error", path=failed, error=str(e), last_index=index)
        raise ChunkIOError(f"I/O failure on {failed}: {e}", path=failed) from e


def _split_chars(
    source_path: Path,
    char_count: int,
    encoding: str,
    target_for: Callable[[int], Path],
    record: ChunkCallback,
) -> None:
    index = 0
    try:
        # newline="" keeps \r\n and lone \r exactly as they are on disk
        with source_path.open("r", encoding=encoding, newline="") as src:
            while True:
                text = src.read(char_count)
                if not text:
                    break
                index += 1
                target = target_for(index)
                with target.open("w", encoding=encoding, newline="") as out:
                    out.write(text)
                record(
                    ChunkDescriptor(
                        path=target,
                        index=index,
                        size=len(text),
                        unit="chars",
                        bytes_written=target.stat().st_size,
                    )
                )
    except UnicodeError as e:
        log.error("chunk.decode_error", path=str(source_path), encoding=encoding, error=str(e))
        raise ChunkIOError(
            f"Cannot decode {source_path} as {encoding}: {e}", path=str(source_path)
        ) from e
    except OSError as e:
        failed = str(target_for(index)) if index else str(source_path)
        log.error("chunk.io_error", path=failed, error=str(e), last_index=index)
        raise ChunkIOError(f"I/O failure on {failed}: {e}", path=failed) from e
