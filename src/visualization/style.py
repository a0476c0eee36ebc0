"""Shared look for every figure: theme, colors and file output.

Network drawings and the statistical plots use the same colorblind-safe
palette so a community keeps its color across figures.
"""

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend for headless rendering

import matplotlib.pyplot as plt
import seaborn as sns
from pathlib import Path

PALETTE = sns.color_palette("colorblind", n_colors=10)
NODE_COLOR = PALETTE[0]  # nodes without a community
HIGHLIGHT_COLOR = PALETTE[3]  # the person being discussed
DIRECTED_COLOR = PALETTE[0]
MUTUAL_COLOR = PALETTE[2]
EDGE_COLOR = "#8c8c8c"

FIGURE_FORMATS = ("png", "svg")


def community_color(label: int) -> tuple[float, float, float]:
    """Palette color for a community label, cycling past 10 communities."""
    return PALETTE[label % len(PALETTE)]


def apply_style() -> None:
    """Seaborn whitegrid theme with compact fonts. Safe to call repeatedly."""
    sns.set_theme(style="whitegrid", palette=PALETTE)
    plt.rcParams.update({
        "figure.dpi": 150,
        "savefig.dpi": 300,
        "font.size": 10,
        "axes.titlesize": 12,
        "axes.labelsize": 11,
        "legend.fontsize": 9,
        "legend.frameon": False,
        "xtick.labelsize": 9,
        "ytick.labelsize": 9,
        "figure.figsize": (8, 5),
        "svg.fonttype": "none",  # keep node labels as SVG text
    })


def save_figure(
    fig: plt.Figure,
    output_dir: Path,
    name: str,
    formats: tuple[str, ...] = FIGURE_FORMATS,
) -> tuple[Path, ...]:
    """Write fig once per format and close it.

    Args:
        fig: Matplotlib figure to save.
        output_dir: Directory to write files into. Created if absent.
        name: Base filename (without extension).
        formats: File extensions, PNG and SVG by default.

    Returns:
        Written paths, in formats order.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    paths = tuple(output_dir / f"{name}.{ext}" for ext in formats)
    try:
        for path in paths:
            fig.savefig(path, bbox_inches="tight")
    finally:
        plt.close(fig)
    return paths
