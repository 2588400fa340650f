import pytest

from muonhits.decode import (
    DecodeError,
    bar_from_bits,
    decode_line,
    hit_words,
    split_columns,
)


def _line(word_a, word_b):
    hb = f"{word_b:03x}"
    ha = f"{word_a:03x}"
    return f"t,{hb[:2]},{hb[2]}{ha[0]},{ha[1:]},e,f"


@pytest.mark.parametrize("bar", range(1, 33))
def test_single_bit_gives_its_bar(bar):
    assert bar_from_bits(1 << (bar - 1), True) == bar
    assert bar_from_bits(1 << (bar - 1), False) == bar


@pytest.mark.parametrize("value", [0, 3, 0x45A, 0xFFF])
def test_single_hit_rejects_other_counts(value):
    assert bar_from_bits(value, True) is None


def test_unrestricted_zero_is_first_bar():
    assert bar_from_bits(0, False) == 1


@pytest.mark.parametrize("bar", range(1, 13))
def test_unrestricted_uses_highest_bit(bar):
    value = (1 << (bar - 1)) | 1
    assert bar_from_bits(value, False) == bar


def test_negative_word_rejected():
    with pytest.raises(ValueError):
        bar_from_bits(-1, False)


def test_split_full_line():
    assert split_columns("a,b,c,d,e,f") == ["a", "b", "c", "d", "e", "f"]


def test_split_drops_trailing_empty_field():
    assert split_columns("a,b,c,d,e,") == ["a", "b", "c", "d", "e"]
    assert split_columns("a,,") == ["a", ""]


def test_split_empty_line_and_newline():
    assert split_columns("") == []
    assert split_columns("a,b\n") == ["a", "b"]


def test_hit_words_source_example():
    # Side B "45" + "a", side A "4" + "0c".
    assert hit_words("x,45,a4,0c,y,z") == (0x40C, 0x45A)


def test_hit_words_short_line_is_skipped():
    assert hit_words("a,b,c,d,e,") is None
    assert hit_words("") is None


def test_hit_words_empty_third_column():
    with pytest.raises(DecodeError):
        hit_words("a,45,,0c,e,f")


def test_hit_words_non_hex():
    with pytest.raises(DecodeError):
        hit_words("a,zz,zz,zz,e,f")


@pytest.mark.parametrize("word_a", [0, 1, 0x40C, 0xFFF])
@pytest.mark.parametrize("word_b", [0, 0x800, 0x45A])
def test_hit_words_round_trip(word_a, word_b):
    assert hit_words(_line(word_a, word_b)) == (word_a, word_b)


@pytest.mark.parametrize("bar_a", [1, 6, 12])
@pytest.mark.parametrize("bar_b", [1, 7, 12])
def test_decode_line_round_trip(bar_a, bar_b):
    line = _line(1 << (bar_a - 1), 1 << (bar_b - 1))
    assert decode_line(line, True) == (bar_a, bar_b)
    assert decode_line(line + "\n", False) == (bar_a, bar_b)


def test_decode_line_marks_multiple_hits():
    line = _line(0b11, 1)
    assert decode_line(line, True) == (None, 1)
    assert decode_line(line, False) == (2, 1)


def test_decode_line_skips_short_line():
    assert decode_line("a,b,c", True) is None