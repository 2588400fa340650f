"""Combination of the three planes' data files into one event tree.

The three files of a date are read line by line in step: the n-th line of
each file belongs to the same event. Reading stops when any file runs out.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Iterable, Sequence
from contextlib import ExitStack
from enum import Enum
from os import PathLike
from pathlib import Path

from muonhits.decode import decode_line
from muonhits.treefile import Tree

PLANES = (1, 2, 3)
MAX_BAR = 12
PROMPT = 'Ingrese fecha que quiere leer - Ejemplo: "2024_09_07": '


class Mode(Enum):
    """How events are selected and which branches the tree carries."""

    FILTERED = "filtrada"
    UNRESTRICTED = "no_filtrada"
    HITS_BRANCH = "hits_branch"

    @property
    def tree_name(self) -> str:
        return {
            Mode.FILTERED: "hits_validados",
            Mode.UNRESTRICTED: "hits",
            Mode.HITS_BRANCH: "hits_validados_y_hits_Branch",
        }[self]

    @property
    def tree_title(self) -> str:
        if self is Mode.UNRESTRICTED:
            return "Eventos"
        return "Eventos válidos con 1 hit por plano"

    @property
    def restricted(self) -> bool:
        """Whether each side of each plane must fire exactly one bar of twelve."""
        return self is not Mode.UNRESTRICTED

    @property
    def branches(self) -> tuple[str, ...]:
        names = [f"barra_{side}_{plane}" for plane in PLANES for side in "AB"]
        if self is Mode.HITS_BRANCH:
            names += [f"multi_hits_{side}_{plane}" for plane in PLANES for side in "AB"]
        return tuple(names)


def plane_file_names(date: str) -> list[str]:
    """Return the data file names of the three planes for *date*."""
    return [f"{date}_06h00_mate-m10{plane}.txt" for plane in PLANES]


def output_name(date: str, mode: Mode) -> str:
    """Return the name of the tree file written for *date* in *mode*."""
    return f"salida_{date}_{mode.value}.root"


def decode_event(lines: Sequence[str], mode: Mode) -> dict[str, int] | None:
    """Return the branch values of one event, or None if it is rejected.

    *lines* holds one record per plane, in plane order. Planes are decoded in
    order and the first rejected plane ends the event.
    """
    if len(lines) != len(PLANES):
        raise ValueError(f"an event needs {len(PLANES)} lines, got {len(lines)}")
    values: dict[str, int] = {}
    for plane, line in zip(PLANES, lines):
        bars = decode_line(line, single_hit=mode.restricted)
        if bars is None:
            return None
        bar_a, bar_b = bars
        if mode.restricted and (
            bar_a is None or bar_b is None or bar_a > MAX_BAR or bar_b > MAX_BAR
        ):
            return None
        values[f"barra_A_{plane}"] = bar_a
        values[f"barra_B_{plane}"] = bar_b
        if mode is Mode.HITS_BRANCH:
            values[f"multi_hits_A_{plane}"] = bar_a
            values[f"multi_hits_B_{plane}"] = bar_b
    return values


def build_tree(streams: Iterable[Iterable[str]], mode: Mode) -> Tree:
    """Return the tree of the accepted events read from the three *streams*."""
    streams = list(streams)
    if len(streams) != len(PLANES):
        raise ValueError(f"expected {len(PLANES)} streams, got {len(streams)}")
    tree = Tree(name=mode.tree_name, title=mode.tree_title, branches=mode.branches)
    for lines in zip(*streams):
        values = decode_event(lines, mode)
        if values is not None:
            tree.fill(**values)
    return tree


def run(
    date: str, directory: str | PathLike[str] = ".", mode: Mode = Mode.FILTERED
) -> Path:
    """Read the planes' files for *date* in *directory* and write the tree.

    Returns the path of the tree file. Raises OSError when a data file
    cannot be opened.
    """
    folder = Path(directory)
    with ExitStack() as stack:
        streams = [
            stack.enter_context(
                open(folder / name, encoding="utf-8", errors="replace", newline="")
            )
            for name in plane_file_names(date)
        ]
        tree = build_tree(streams, mode)
    output_path = folder / output_name(date, mode)
    tree.write(output_path)
    return output_path


def main(argv: Sequence[str] | None = None) -> int:
    """Build the multi-plane tree for a date; return the exit status."""
    parser = argparse.ArgumentParser(
        description="Combine the three planes' data files of a date into one tree."
    )
    parser.add_argument("date", nargs="?", help='date of the files, e.g. "2024_09_07"')
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in Mode],
        default=Mode.FILTERED.value,
        help="event selection and branches of the tree",
    )
    parser.add_argument("--directory", default=".", help="folder of the data files")
    args = parser.parse_args(argv)

    date = args.date
    if date is None:
        try:
            words = input(PROMPT).split()
        except EOFError:
            words = []
        date = words[0] if words else ""

    mode = Mode(args.mode)
    try:
        output_path = run(date, args.directory, mode)
    except OSError as error:
        name = Path(error.filename).name if error.filename else str(error)
        print(f"Error al abrir el archivo: {name}", file=sys.stderr)
        return 1
    print(f"Proceso completado. Archivo '{output_path.name}' creado.")
    return 0


if __name__ == "__main__":
    sys.exit(main())