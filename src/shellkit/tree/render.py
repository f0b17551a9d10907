"""Directory tree rendering with exclusion and depth limiting."""

import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ..core.errors import InvalidInputError, NotFoundError
from ..core.filters import should_skip
from ..core.logging import log

BRANCH = "├── "
LAST = "└── "
PIPE = "│   "
SPACE = "    "


@dataclass
class TreeReport:
    """Rendered tree lines plus entry counts (root excluded)."""

    root: Path
    lines: list[str] = field(default_factory=list)
    directories: int = 0
    files: int = 0
    errors: int = 0

    def summary(self) -> str:
        dirs = "directory" if self.directories == 1 else "directories"
        files = "file" if self.files == 1 else "files"
        return f"{self.directories} {dirs}, {self.files} {files}"

    def render(self) -> str:
        return "\n".join([*self.lines, "", self.summary()])


def _sort_key(entry: os.DirEntry) -> tuple[bool, str]:
    # Directories first, then case-insensitive name
    try:
        is_dir = entry.is_dir()
    except OSError:
        is_dir = False
    return (not is_dir, entry.name.lower())


def _list_entries(
    directory: Path, exclude: tuple[str, ...], show_hidden: bool, dirs_only: bool
) -> list[os.DirEntry]:
    with os.scandir(directory) as it:
        entries = [
            e
            for e in it
            if not should_skip(e.name, exclude, show_hidden)
            and (not dirs_only or e.is_dir())
        ]
    return sorted(entries, key=_sort_key)


def render_tree(
    root: str | Path,
    exclude: Iterable[str] = (),
    max_depth: Optional[int] = None,
    show_hidden: bool = False,
    dirs_only: bool = False,
) -> TreeReport:
    """
    Walk ``root`` and render it as an indented tree.

    Args:
        root: Directory to render.
        exclude: fnmatch patterns matched against entry names; matching
            directories are not descended.
        max_depth: Levels below root to show (1 = direct children only).
        show_hidden: Include dot-files and dot-directories.
        dirs_only: Only list directories.

    Returns:
        TreeReport whose first line is the root path.
    """
    root_path = Path(root).expanduser()
    if not root_path.exists():
        raise NotFoundError(f"Directory not found: {root_path}")
    if not root_path.is_dir():
        raise InvalidInputError(f"Not a directory: {root_path}")
    if max_depth is not None and max_depth < 1:
        raise InvalidInputError(f"Max depth must be at least 1 (got {max_depth})")

    patterns = tuple(exclude)
    report = TreeReport(root=root_path, lines=[str(root_path)])

    def walk(directory: Path, prefix: str, depth: int) -> None:
        try:
            entries = _list_entries(directory, patterns, show_hidden, dirs_only)
        except OSError as e:
            report.errors += 1
            reason = "permission denied" if isinstance(e, PermissionError) else e.strerror or str(e)
            log.warning("tree.unreadable", path=str(directory), error=str(e))
            report.lines.append(f"{prefix}{LAST}[{reason}]")
            return

        for position, entry in enumerate(entries):
            is_last = position == len(entries) - 1
            connector = LAST if is_last else BRANCH
            is_link = entry.is_symlink()
            is_dir = entry.is_dir()

            if is_dir:
                report.directories += 1
                name = f"{entry.name}/"
                if is_link:
                    name += f" -> {os.readlink(entry.path)}"
                report.lines.append(f"{prefix}{connector}{name}")
                # Symlinked directories are shown but never followed
                if not is_link and (max_depth is None or depth < max_depth):
                    walk(Path(entry.path), prefix + (SPACE if is_last else PIPE), depth + 1)
            else:
                report.files += 1
                report.lines.append(f"{prefix}{connector}{entry.name}")

    walk(root_path, "", 1)
    log.info(
        "tree.done",
        root=str(root_path),
        directories=report.directories,
        files=report.files,
        errors=report.errors,
    )
    return report
