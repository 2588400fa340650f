"""A small named table of integer branches, stored as a JSON file.

A tree has a name, a title and a fixed list of integer branches; every
entry holds one value for each branch. Writing a tree replaces whatever the
file held before.
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path

_FORMAT = "muonhits-tree"
_VERSION = 1


class TreeFileError(Exception):
    """Raised when a tree file cannot be opened, parsed or searched."""


@dataclass
class Tree:
    """Entries of integer values under named branches."""

    name: str
    title: str = ""
    branches: Sequence[str] = ()
    entries: list[tuple[int, ...]] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.branches = tuple(self.branches)
        if len(set(self.branches)) != len(self.branches):
            raise ValueError(f"duplicate branch names in {self.branches}")
        self.entries = [tuple(entry) for entry in self.entries]
        for entry in self.entries:
            if len(entry) != len(self.branches):
                raise ValueError(f"entry {entry} does not match the branches")

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[dict[str, int]]:
        for entry in self.entries:
            yield dict(zip(self.branches, entry))

    def fill(self, **kwargs: int) -> None:
        """Append one entry; every branch must be given exactly once."""
        if set(kwargs) != set(self.branches):
            missing = sorted(set(self.branches) - set(kwargs))
            unknown = sorted(set(kwargs) - set(self.branches))
            raise ValueError(
                f"entry does not match branches: missing {missing}, unknown {unknown}"
            )
        values = []
        for branch in self.branches:
            value = kwargs[branch]
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"branch {branch!r} takes integers, got {value!r}")
            values.append(value)
        self.entries.append(tuple(values))

    def column(self, branch: str) -> list[int]:
        """Return every value of *branch*, in entry order."""
        try:
            index = self.branches.index(branch)
        except ValueError:
            raise KeyError(branch) from None
        return [entry[index] for entry in self.entries]

    def write(self, path: str | PathLike[str]) -> None:
        """Write the tree to *path*, replacing the file."""
        document = {
            "format": _FORMAT,
            "version": _VERSION,
            "trees": [
                {
                    "name": self.name,
                    "title": self.title,
                    "branches": list(self.branches),
                    "entries": [list(entry) for entry in self.entries],
                }
            ],
        }
        try:
            with open(path, "w", encoding="utf-8") as stream:
                json.dump(document, stream)
        except OSError as error:
            raise TreeFileError(f"cannot write {path}: {error}") from error


def read_tree(path: str | PathLike[str], name: str) -> Tree:
    """Load the tree called *name* from the file at *path*."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as error:
        raise TreeFileError(f"cannot open {path}: {error}") from error
    try:
        document = json.loads(text)
    except json.JSONDecodeError as error:
        raise TreeFileError(f"{path} is not a tree file: {error}") from error
    if not isinstance(document, dict) or document.get("format") != _FORMAT:
        raise TreeFileError(f"{path} is not a tree file")
    for record in document.get("trees", []):
        if record.get("name") == name:
            try:
                return Tree(
                    name=name,
                    title=record.get("title", ""),
                    branches=record["branches"],
                    entries=record["entries"],
                )
            except (KeyError, TypeError, ValueError) as error:
                raise TreeFileError(f"tree {name!r} in {path} is damaged") from error
    raise TreeFileError(f"no tree named {name!r} in {path}")