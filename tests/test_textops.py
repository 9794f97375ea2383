import pytest

from fieldmask.engine.textops import (
    get_first_diff_index,
    get_formatted_value,
    get_max_length,
    get_prefix_stripped_value,
    head_str,
    is_delimiter,
    strip_delimiters,
    strip_non_digits,
)


def test_is_delimiter_single():
    assert is_delimiter("-", "-", [])
    assert not is_delimiter("/", "-", [])


def test_is_delimiter_multiple():
    assert is_delimiter(".", " ", [".", "-"])
    assert is_delimiter("-", " ", [".", "-"])
    # the shared delimiter is ignored once per-boundary delimiters exist
    assert not is_delimiter(" ", " ", [".", "-"])


@pytest.mark.parametrize(
    "value, delimiter, delimiters, expected",
    [
        ("4111-1111", "-", [], "41111111"),
        ("1.2.3", ".", [], "123"),          # "." must not act as a wildcard
        ("a|b|c", "|", [], "abc"),
        ("123.456.789-01", " ", [".", ".", "-"], "12345678901"),
        ("12 34", "", [], "12 34"),
    ],
)
def test_strip_delimiters(value, delimiter, delimiters, expected):
    assert strip_delimiters(value, delimiter, delimiters) == expected


def test_head_str_and_max_length():
    assert head_str("12345", 3) == "123"
    assert head_str("12", 5) == "12"
    assert get_max_length([4, 4, 4, 4]) == 16
    assert get_max_length([]) == 0


def test_strip_non_digits():
    assert strip_non_digits("(555) 123-4567") == "5551234567"
    assert strip_non_digits("abc") == ""


def test_first_diff_index():
    assert get_first_diff_index("PRE", "PR1") == 2
    assert get_first_diff_index("abc", "ab") == 2
    assert get_first_diff_index("abc", "abc") == -1


class TestPrefixStripping:
    def test_intact_prefix_is_dropped(self):
        assert get_prefix_stripped_value("PRE123", "PRE", 3) == "123"

    def test_deletion_inside_prefix_is_absorbed(self):
        assert get_prefix_stripped_value("PR123", "PRE", 3) == "23"

    def test_empty_prefix_is_noop(self):
        assert get_prefix_stripped_value("123", "", 0) == "123"

    def test_value_shorter_than_prefix(self):
        assert get_prefix_stripped_value("PR", "PRE", 3) == ""
        assert get_prefix_stripped_value("", "PRE", 3) == ""


class TestBlockSegmentation:
    def test_card_number(self):
        assert get_formatted_value("4111111111111111", [4, 4, 4, 4], "-", []) == "4111-1111-1111-1111"

    def test_partial_input(self):
        assert get_formatted_value("41111", [4, 4, 4, 4], "-", []) == "4111-1"

    def test_full_block_gets_trailing_delimiter(self):
        assert get_formatted_value("4111", [4, 4, 4, 4], "-", []) == "4111-"

    def test_last_block_has_no_delimiter(self):
        assert get_formatted_value("12345678", [4, 4], "-", []) == "1234-5678"

    def test_overflow_is_dropped(self):
        assert get_formatted_value("123456789", [4, 4], "-", []) == "1234-5678"

    def test_per_boundary_delimiters(self):
        result = get_formatted_value("12345678901", [3, 3, 3, 2], " ", [".", ".", "-"])
        assert result == "123.456.789-01"

    def test_sticky_delimiter_fallback(self):
        assert get_formatted_value("12345678", [2, 2, 2, 2], " ", ["/"]) == "12/34/56/78"
        assert get_formatted_value("123456", [2, 2, 2], " ", ["-", "", ":"]) == "12-34-56"

    def test_no_blocks(self):
        assert get_formatted_value("hello", [], "-", []) == "hello"

    def test_empty_value(self):
        assert get_formatted_value("", [4, 4], "-", []) == ""
