"""Directory tree visualizer."""

from .render import TreeReport, render_tree

__all__ = ["TreeReport", "render_tree"]
