"""Static figures of the friendship network and its computed measures.

Provides render_all() to generate all figures for a single analysis run,
with individual plot modules for each visualization type.
"""

from src.visualization.render import render_all
from src.visualization.style import apply_style, save_figure

__all__ = [
    "render_all",
    "apply_style",
    "save_figure",
]
