"""Name filters shared by the directory walkers (tree, concat)."""

import fnmatch
from collections.abc import Iterable
from pathlib import Path

BINARY_SAMPLE_SIZE = 8192


def is_hidden(name: str) -> bool:
    return name.startswith(".")


def is_excluded(name: str, patterns: Iterable[str]) -> bool:
    """Check a single path component against fnmatch-style patterns."""
    return any(fnmatch.fnmatch(name, pattern) for pattern in patterns)


def should_skip(name: str, patterns: Iterable[str], show_hidden: bool = False) -> bool:
    if not show_hidden and is_hidden(name):
        return True
    return is_excluded(name, patterns)


def normalize_extensions(extensions: Iterable[str] | None) -> set[str] | None:
    """Lower-case extensions and make sure each carries a leading dot."""
    if not extensions:
        return None
    normalized = set()
    for ext in extensions:
        ext = ext.strip().lower()
        if not ext:
            continue
        normalized.add(ext if ext.startswith(".") else f".{ext}")
    return normalized or None


def looks_binary(path: Path, sample_size: int = BINARY_SAMPLE_SIZE) -> bool:
    """A NUL byte near the start of the file marks it as binary."""
    with path.open("rb") as f:
        sample = f.read(sample_size)
    return b"\x00" in sample
