"""Concatenate text sources below a directory into one stream."""

import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, TextIO

from ..core.errors import InvalidInputError, NotFoundError
from ..core.filters import looks_binary, normalize_extensions, should_skip
from ..core.logging import log

DEFAULT_HEADER = "===== {path} ====="


@dataclass
class ConcatReport:
    files: int = 0
    skipped: int = 0
    total_chars: int = 0


def resolve_root(root: str | Path) -> Path:
    root_path = Path(root).expanduser()
    if not root_path.exists():
        raise NotFoundError(f"Directory not found: {root_path}")
    if not root_path.is_dir():
        raise InvalidInputError(f"Not a directory: {root_path}")
    return root_path


def iter_source_files(
    root: Path,
    exclude: tuple[str, ...] = (),
    extensions: Optional[set[str]] = None,
) -> Iterator[Path]:
    """Yield files below ``root`` in sorted, depth-first order."""
    for dirpath, dirnames, filenames in os.walk(root):
        # Prune in place so excluded directories are never descended
        dirnames[:] = sorted(
            (d for d in dirnames if not should_skip(d, exclude)), key=str.lower
        )
        for filename in sorted(filenames, key=str.lower):
            if should_skip(filename, exclude):
                continue
            if extensions is not None and Path(filename).suffix.lower() not in extensions:
                continue
            yield Path(dirpath) / filename


def concat_sources(
    root: str | Path,
    out: TextIO,
    extensions: Optional[Iterable[str]] = None,
    exclude: Iterable[str] = (),
    header: str = DEFAULT_HEADER,
    ignore: Iterable[Path] = (),
) -> ConcatReport:
    """
    Write every matching text file below ``root`` to ``out``.

    Each file is preceded by ``header`` formatted with its POSIX relative
    path. Binary and unreadable files are skipped and counted. Paths in
    ``ignore`` (typically the output file itself) are left out silently.
    """
    root_path = resolve_root(root)
    if "{path}" not in header:
        raise InvalidInputError("Header template must contain {path}")

    report = ConcatReport()
    wanted = normalize_extensions(extensions)
    ignored = {Path(p).resolve() for p in ignore}

    for path in iter_source_files(root_path, tuple(exclude), wanted):
        if path.resolve() in ignored:
            continue
        rel = path.relative_to(root_path).as_posix()
        try:
            if looks_binary(path):
                report.skipped += 1
                log.info("concat.skipped", path=rel, reason="binary")
                continue
            content = path.read_bytes().decode("utf-8", errors="replace")
        except OSError as e:
            report.skipped += 1
            log.warning("concat.skipped", path=rel, reason="unreadable", error=str(e))
            continue

        if report.files:
            out.write("\n")
        out.write(header.replace("{path}", rel) + "\n")
        out.write(content)
        if content and not content.endswith("\n"):
            out.write("\n")
        report.files += 1
        report.total_chars += len(content)

    log.info("concat.done", root=str(root_path), files=report.files, skipped=report.skipped)
    return report
