import pytest

from muonhits.decode import DecodeError
from muonhits.single_plane import (
    build_tree,
    filter_events,
    main,
    process_file,
)
from muonhits.treefile import read_tree


def record(word_a: int, word_b: int) -> str:
    """Lay out two 12-bit words in the record's column format."""
    hex_a = f"{word_a:03x}"
    hex_b = f"{word_b:03x}"
    return f"ev,{hex_b[:-1]},{hex_b[-1]}{hex_a[0]},{hex_a[1:]},x,y"


@pytest.mark.parametrize("bar", range(1, 13))
def test_single_hits_are_kept(bar):
    word = 1 << (bar - 1)
    assert list(filter_events([record(word, word)])) == [(bar, bar)]


def test_sides_are_not_swapped():
    assert list(filter_events([record(1, 1 << 11)])) == [(1, 12)]


def test_hand_written_record():
    assert list(filter_events(["t,80,00,01,x,y"])) == [(1, 12)]


@pytest.mark.parametrize(
    "word_a, word_b",
    [(0b11, 1), (1, 0b101), (0, 1), (1, 0), (0xFFF, 0xFFF)],
)
def test_events_without_single_hits_are_dropped(word_a, word_b):
    assert list(filter_events([record(word_a, word_b)])) == []


def test_bars_beyond_twelve_are_dropped():
    line = "ev,100,00,01,x,y"
    assert list(filter_events([line])) == []


def test_short_records_are_skipped():
    lines = ["a,b,c", "", record(1, 2)[: -len(",y")], record(2, 4)]
    assert list(filter_events(lines)) == [(2, 3)]


def test_bad_hex_raises():
    with pytest.raises(DecodeError):
        list(filter_events(["ev,zz,zz,zz,x,y"]))


def test_build_tree_collects_in_order():
    lines = [record(1, 2), record(3, 1), record(4, 8)]
    tree = build_tree(lines)
    assert tree.name == "hits_validados"
    assert tree.branches == ("barra_A", "barra_B")
    assert tree.column("barra_A") == [1, 3]
    assert tree.column("barra_B") == [2, 4]


def test_process_file_round_trip(tmp_path):
    source = tmp_path / "plane.txt"
    source.write_text(
        "\r\n".join([record(1, 2), record(3, 3), record(2048, 1)]) + "\r\n",
        encoding="utf-8",
    )
    target = tmp_path / "out.root"
    tree = process_file(source, target)
    loaded = read_tree(target, "hits_validados")
    assert loaded.entries == tree.entries
    assert loaded.column("barra_A") == [1, 12]


def test_process_file_missing_input(tmp_path):
    with pytest.raises(OSError):
        process_file(tmp_path / "absent.txt", tmp_path / "out.root")


def test_main_writes_default_names(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "2024_09_07_06h00_mate-m102.txt").write_text(
        record(1, 1) + "\n", encoding="utf-8"
    )
    assert main(["m102"]) == 0
    tree = read_tree(tmp_path / "salida_m102_filtrada.root", "hits_validados")
    assert list(tree) == [{"barra_A": 1, "barra_B": 1}]
    assert "salida_m102_filtrada.root" in capsys.readouterr().out


def test_main_reports_missing_input(tmp_path, capsys):
    status = main(["--input", str(tmp_path / "none.txt"), "--output", str(tmp_path / "o")])
    assert status == 1
    assert "No se pudo abrir" in capsys.readouterr().err