"""Source concatenation."""

from .sources import ConcatReport, concat_sources, iter_source_files, resolve_root

__all__ = ["ConcatReport", "concat_sources", "iter_source_files", "resolve_root"]
