import pytest

from cut import (
    Mode,
    Selection,
    extract,
    extract_bytes,
    extract_chars,
    extract_fields,
)

# "É" is two bytes in UTF-8.
LINE = "Ébc"


def test_extract_chars():
    assert extract_chars("", [range(0, 1)]) == ""
    assert extract_chars(LINE, [range(0, 1)]) == "É"
    assert extract_chars(LINE, [range(0, 1), range(2, 3)]) == "Éc"
    assert extract_chars(LINE, [range(0, 3)]) == LINE
    assert extract_chars(LINE, [range(2, 3), range(1, 2)]) == "cb"
    assert extract_chars(LINE, [range(0, 1), range(1, 2), range(4, 5)]) == "Éb"


def test_adjacent_ranges_compose():
    s = "xy"
    assert extract_chars(s, [range(0, 1), range(1, 2)]) == extract_chars(s, [range(0, 2)])


def test_selection_order_drives_output_order():
    s = "abcdef"
    r1, r2 = range(0, 2), range(3, 5)
    assert extract_chars(s, [r2, r1]) == extract_chars(s, [r2]) + extract_chars(s, [r1])
    assert extract_chars(s, [r1, r2]) == "abde"
    assert extract_chars(s, [r2, r1]) == "deab"


def test_overlapping_ranges_repeat_output():
    assert extract_chars("abc", [range(0, 2), range(1, 3), range(0, 1)]) == "abbca"


def test_huge_range_is_clamped():
    assert extract_chars("abc", [range(1, 10 ** 18)]) == "bc"
    assert extract_chars("abc", [range(10 ** 18, 10 ** 18 + 1)]) == ""


def test_extract_bytes():
    assert extract_bytes(LINE, [range(0, 1)]) == "�"
    assert extract_bytes(LINE, [range(0, 2)]) == "É"
    assert extract_bytes(LINE, [range(0, 3)]) == "Éb"
    assert extract_bytes(LINE, [range(0, 4)]) == LINE
    assert extract_bytes(LINE, [range(3, 4), range(2, 3)]) == "cb"
    assert extract_bytes(LINE, [range(0, 2), range(5, 6)]) == "É"


def test_extract_bytes_marks_each_broken_character():
    assert extract_bytes(LINE, [range(1, 2)]) == "�"
    assert extract_bytes("ÉÉ", [range(0, 1), range(2, 3)]) == "��"


def test_extract_bytes_of_empty_line():
    assert extract_bytes("", [range(0, 5)]) == ""


def test_extract_fields():
    record = ["Captain", "Sham", "12345"]
    assert extract_fields(record, [range(0, 1)]) == ["Captain"]
    assert extract_fields(record, [range(1, 2)]) == ["Sham"]
    assert extract_fields(record, [range(0, 1), range(2, 3)]) == ["Captain", "12345"]
    assert extract_fields(record, [range(0, 1), range(3, 4)]) == ["Captain"]
    assert extract_fields(record, [range(1, 2), range(0, 1)]) == ["Sham", "Captain"]
    assert extract_fields([], [range(0, 3)]) == []


@pytest.mark.parametrize(
    "mode, unit, expected",
    [
        (Mode.CHARS, LINE, "Éb"),
        (Mode.BYTES, LINE, "É"),
        (Mode.FIELDS, ["a", "b", "c"], ["a", "b"]),
    ],
)
def test_extract_dispatches_on_mode(mode, unit, expected):
    assert extract(Selection(mode, (range(0, 2),)), unit) == expected


def test_extract_without_mode():
    with pytest.raises(ValueError, match="Must have --fields, --bytes, or --chars"):
        extract(None, "abc")
    with pytest.raises(ValueError):
        extract(Selection("columns", (range(0, 1),)), "abc")


def test_selection_equality():
    assert Selection(Mode.BYTES, (range(0, 1),)) == Selection(Mode.BYTES, (range(0, 1),))
    assert Selection(Mode.BYTES, (range(0, 1),)) != Selection(Mode.CHARS, (range(0, 1),))
    assert repr(Selection(Mode.CHARS, (range(0, 3),))) == "Selection(Mode.CHARS, '1-3')"


def test_selection_repr_with_huge_range():
    selection = Selection(Mode.CHARS, (range(0, 10 ** 20),))
    assert repr(selection) == "Selection(Mode.CHARS, '1-100000000000000000000')"
