# muonhits

Tools for turning the raw text dumps of a three-plane muon detector into
per-event bar numbers, and for drawing where the hits landed.

Every detector plane has two crossed layers of twelve bars, side A and
side B. Each line of a plane's text file is a comma separated record; its
second, third and fourth columns carry the hit pattern of both sides as two
hexadecimal words. Side B is the second column followed by the first
character of the third; side A is the second character of the third column
followed by the fourth. A word with exactly one bit set names the bar that
fired (bit 0 is bar 1, bit 11 is bar 12); any other pattern is a multiple
hit or an empty read-out.

## Installation

```
pip install .
```

The heatmaps are drawn with matplotlib, which is installed with the package.

## Tree files

Results are stored as *tree files*: a small JSON document holding a named
table of integer branches. The commands give them names ending in `.root`
by default, but they are JSON, not files in any binary analysis format, and
other tools will not read them. Use `muonhits.treefile.read_tree` to load
them.

## Commands

### `muonhits-process` — one plane

```
muonhits-process [PLANE] [--input FILE] [--output FILE]
```

Reads one plane's text file, keeps only the records with six or more
columns and exactly one hit on side A and on side B (both within bars
1–12), and writes them to a tree named `hits_validados` with the branches
`barra_A` and `barra_B`.

`PLANE` defaults to `m101`. Without `--input` the file read is
`2024_09_07_06h00_mate-<PLANE>.txt`; without `--output` the file written is
`salida_<PLANE>_filtrada.root`. The exit status is 1 when the input cannot
be opened.

### `muonhits-heatmap` — hit map of one plane

```
muonhits-heatmap [PLANE] [--input FILE] [--output FILE] [--no-show]
```

Reads the `hits_validados` tree (default `salida_<PLANE>_filtrada.root`)
and fills a 12 × 12 histogram with side B on the horizontal axis and side A
on the vertical axis, bins centred on the bar numbers 1 to 12. The colour
map with its scale is saved as an 800 × 600 image (default
`heatmap_<PLANE>.png`); empty bins are left blank. Unless `--no-show` is
given, the map is then also shown in an interactive window. The exit status
is 1 when the tree file cannot be read.

### `muonhits-multiplane` — all three planes together

```
muonhits-multiplane [DATE] [--mode {filtrada,no_filtrada,hits_branch}] [--directory DIR]
```

Given a date such as `2024_09_07`, opens `<DATE>_06h00_mate-m101.txt`,
`<DATE>_06h00_mate-m102.txt` and `<DATE>_06h00_mate-m103.txt` in `DIR`
(default the current folder), reads them line by line in step, and writes
one event per accepted line triple with the branches `barra_A_1`,
`barra_B_1`, …, `barra_A_3`, `barra_B_3`. Reading stops as soon as any of
the three files runs out, and a triple is skipped if any of its records has
fewer than six columns. The tree file is written into `DIR`.

* `filtrada` (default) — an event is kept only if all six sides have a
  single hit on bars 1–12; output `salida_<DATE>_filtrada.root`, tree
  `hits_validados`.
* `no_filtrada` — every well-formed triple is kept and each side is given
  as the position of its highest set bit (an empty word counts as bar 1);
  output `salida_<DATE>_no_filtrada.root`, tree `hits`.
* `hits_branch` — as `filtrada`, with the extra branches `multi_hits_A_1` …
  `multi_hits_B_3` holding the same bar numbers; output
  `salida_<DATE>_hits_branch.root`, tree `hits_validados_y_hits_Branch`.

If no date is given it is asked for on standard input. The exit status is 1
when a data file cannot be opened.

## Using the library

```python
from muonhits.decode import bar_from_bits, decode_line
from muonhits.treefile import read_tree
from muonhits.histogram import histogram_from_tree, save_heatmap

bar_from_bits(0x004, single_hit=True)   # -> 3
bar_from_bits(0x005, single_hit=True)   # -> None (two bars fired)

tree = read_tree("salida_m101_filtrada.root", "hits_validados")
hist = histogram_from_tree(tree, "barra_B", "barra_A", "Hits en m101")
print(hist.bin_content(3, 5))
save_heatmap(hist, "heatmap_m101.png")
```

* `muonhits.decode` — `split_columns`, `hit_words`, `decode_line` and
  `bar_from_bits`. `hit_words` and `decode_line` return None for a record
  with fewer than six columns and raise `DecodeError` when the third column
  is empty or a hit word is not hexadecimal.
* `muonhits.treefile` — `Tree` (with `fill`, `column` and `write`) and
  `read_tree`, which raises `TreeFileError` when the file cannot be read or
  holds no tree of the requested name.
* `muonhits.single_plane` — `filter_events`, `build_tree`, `process_file`.
* `muonhits.histogram` — `Histogram2D` (with `find_bin`, `fill`,
  `bin_content` and `edges`; bin 0 and bin `n + 1` collect underflow and
  overflow), `histogram_from_tree` and `save_heatmap`.
* `muonhits.multiplane` — `Mode`, `plane_file_names`, `output_name`,
  `decode_event`, `build_tree` and `run`.

## Running the tests

```
pip install .[test]
pytest
```