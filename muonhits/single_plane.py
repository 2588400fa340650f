"""Filtering of one plane's data file down to events with a single hit per side."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Iterable, Iterator, Sequence
from os import PathLike

from muonhits.decode import decode_line
from muonhits.treefile import Tree

TREE_NAME = "hits_validados"
TREE_TITLE = "Eventos válidos con 1 hit en A y B"
BRANCHES = ("barra_A", "barra_B")
MAX_BAR = 12
DEFAULT_DATE = "2024_09_07"


def filter_events(lines: Iterable[str]) -> Iterator[tuple[int, int]]:
    """Yield ``(bar_a, bar_b)`` for every record with one hit on each side.

    Records with too few columns are skipped, as are those where a side fired
    no bar, several bars, or a bar beyond the twelfth.
    """
    for line in lines:
        bars = decode_line(line, single_hit=True)
        if bars is None:
            continue
        bar_a, bar_b = bars
        if bar_a is None or bar_b is None:
            continue
        if bar_a <= MAX_BAR and bar_b <= MAX_BAR:
            yield bar_a, bar_b


def build_tree(lines: Iterable[str]) -> Tree:
    """Return a tree holding the accepted events of *lines*."""
    tree = Tree(name=TREE_NAME, title=TREE_TITLE, branches=BRANCHES)
    for bar_a, bar_b in filter_events(lines):
        tree.fill(barra_A=bar_a, barra_B=bar_b)
    return tree


def process_file(
    input_path: str | PathLike[str], output_path: str | PathLike[str]
) -> Tree:
    """Filter the data file at *input_path* and write the tree to *output_path*."""
    with open(input_path, encoding="utf-8", errors="replace", newline="") as stream:
        tree = build_tree(stream)
    tree.write(output_path)
    return tree


def _input_name(plane: str) -> str:
    return f"{DEFAULT_DATE}_06h00_mate-{plane}.txt"


def _output_name(plane: str) -> str:
    return f"salida_{plane}_filtrada.root"


def main(argv: Sequence[str] | None = None) -> int:
    """Filter one plane's data file; return the exit status."""
    parser = argparse.ArgumentParser(
        description="Keep the events with exactly one hit on each side of a plane."
    )
    parser.add_argument("plane", nargs="?", default="m101", help="plane name, e.g. m101")
    parser.add_argument("--input", help="data file to read")
    parser.add_argument("--output", help="tree file to write")
    args = parser.parse_args(argv)

    input_path = args.input or _input_name(args.plane)
    output_path = args.output or _output_name(args.plane)
    try:
        process_file(input_path, output_path)
    except OSError:
        print("No se pudo abrir el archivo de entrada.", file=sys.stderr)
        return 1
    print(f"Proceso terminado. Archivo '{output_path}' creado.")
    return 0


if __name__ == "__main__":
    sys.exit(main())