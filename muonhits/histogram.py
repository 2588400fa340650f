"""Two-dimensional bar histograms of filtered hits and their heat maps."""

from __future__ import annotations

import argparse
import math
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field
from os import PathLike

from muonhits.treefile import Tree, TreeFileError, read_tree

TREE_NAME = "hits_validados"
CANVAS_TITLE = "Mapa de Calor"
_WIDTH_PX = 800
_HEIGHT_PX = 600
_DPI = 100


@dataclass
class Histogram2D:
    """Integer counts over a regular grid, with underflow and overflow bins.

    Bins are numbered from 1 to ``nx`` (``ny``); bin 0 collects values below
    the low edge and bin ``nx + 1`` (``ny + 1``) values at or above the high
    edge.
    """

    title: str = ""
    nx: int = 12
    xlow: float = 0.5
    xup: float = 12.5
    ny: int = 12
    ylow: float = 0.5
    yup: float = 12.5
    entries: int = field(default=0, init=False)
    _counts: list[list[int]] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.nx < 1 or self.ny < 1:
            raise ValueError("a histogram needs at least one bin on each axis")
        if not (self.xlow < self.xup and self.ylow < self.yup):
            raise ValueError("the low edge must lie below the high edge")
        self._counts = [[0] * (self.ny + 2) for _ in range(self.nx + 2)]

    @staticmethod
    def _axis_bin(value: float, bins: int, low: float, up: float) -> int:
        if math.isnan(value):
            raise ValueError("cannot place NaN in a bin")
        if value < low:
            return 0
        if value >= up:
            return bins + 1
        return 1 + int(bins * (value - low) / (up - low))

    def find_bin(self, x: float, y: float) -> tuple[int, int]:
        """Return the ``(ix, iy)`` bin that holds the point ``(x, y)``."""
        return (
            self._axis_bin(x, self.nx, self.xlow, self.xup),
            self._axis_bin(y, self.ny, self.ylow, self.yup),
        )

    def fill(self, x: float, y: float) -> tuple[int, int]:
        """Count the point ``(x, y)`` once and return its bin."""
        ix, iy = self.find_bin(x, y)
        self._counts[ix][iy] += 1
        self.entries += 1
        return ix, iy

    def bin_content(self, ix: int, iy: int) -> int:
        """Return the count of bin ``(ix, iy)``, flow bins included."""
        if not (0 <= ix <= self.nx + 1 and 0 <= iy <= self.ny + 1):
            raise IndexError(f"bin ({ix}, {iy}) is outside the histogram")
        return self._counts[ix][iy]

    def edges(self) -> tuple[list[float], list[float]]:
        """Return the bin edges along x and along y."""
        x_step = (self.xup - self.xlow) / self.nx
        y_step = (self.yup - self.ylow) / self.ny
        return (
            [self.xlow + i * x_step for i in range(self.nx + 1)],
            [self.ylow + i * y_step for i in range(self.ny + 1)],
        )


def histogram_from_tree(
    tree: Tree, x_branch: str, y_branch: str, title: str = ""
) -> Histogram2D:
    """Fill a 12 by 12 bar histogram from two branches of *tree*."""
    histogram = Histogram2D(title=title)
    for x, y in zip(tree.column(x_branch), tree.column(y_branch)):
        histogram.fill(x, y)
    return histogram


def _draw(histogram: Histogram2D, figure) -> None:
    axes = figure.add_subplot(1, 1, 1)
    x_edges, y_edges = histogram.edges()
    grid = [
        [
            float(count) if (count := histogram.bin_content(ix, iy)) else math.nan
            for ix in range(1, histogram.nx + 1)
        ]
        for iy in range(1, histogram.ny + 1)
    ]
    mesh = axes.pcolormesh(x_edges, y_edges, grid)
    figure.colorbar(mesh, ax=axes)
    axes.set_xlim(histogram.xlow, histogram.xup)
    axes.set_ylim(histogram.ylow, histogram.yup)
    axes.set_title(histogram.title)


def save_heatmap(histogram: Histogram2D, path: str | PathLike[str]) -> None:
    """Draw *histogram* as a colour map with a scale and save it as an image."""
    from matplotlib.figure import Figure

    figure = Figure(figsize=(_WIDTH_PX / _DPI, _HEIGHT_PX / _DPI), dpi=_DPI)
    _draw(histogram, figure)
    figure.savefig(path, dpi=_DPI)


def _show(histogram: Histogram2D) -> None:
    import matplotlib.pyplot as plt

    figure = plt.figure(figsize=(_WIDTH_PX / _DPI, _HEIGHT_PX / _DPI), dpi=_DPI)
    manager = figure.canvas.manager
    if manager is not None:
        manager.set_window_title(CANVAS_TITLE)
    _draw(histogram, figure)
    plt.show()


def main(argv: Sequence[str] | None = None) -> int:
    """Build the heat map of one plane's filtered hits; return the exit status."""
    parser = argparse.ArgumentParser(
        description="Draw the bar heat map of a plane's filtered hits."
    )
    parser.add_argument("plane", nargs="?", default="m101", help="plane name, e.g. m101")
    parser.add_argument("--input", help="tree file to read")
    parser.add_argument("--output", help="image file to write")
    parser.add_argument(
        "--no-show", action="store_true", help="do not open an interactive window"
    )
    args = parser.parse_args(argv)

    input_path = args.input or f"salida_{args.plane}_filtrada.root"
    output_path = args.output or f"heatmap_{args.plane}.png"
    try:
        tree = read_tree(input_path, TREE_NAME)
    except TreeFileError as error:
        print(f"Error al abrir el archivo: {error}", file=sys.stderr)
        return 1

    histogram = histogram_from_tree(
        tree,
        "barra_B",
        "barra_A",
        f"Mapa de calor - Hits en {args.plane} - Sin Casos Especiales",
    )
    save_heatmap(histogram, output_path)
    if not args.no_show:
        _show(histogram)
    return 0


if __name__ == "__main__":
    sys.exit(main())