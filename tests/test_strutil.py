import pytest

from webserv.strutil import (
    consume,
    get_extension,
    has_space,
    is_http_space,
    is_unsigned_int_str,
    pass_lws,
    split,
    strtrim,
    to_hex_num,
    to_num,
)


@pytest.mark.parametrize(
    "text, expected",
    [("ab cd", True), ("abcd", False), ("a\tb", True), ("x\ny", True), ("a\0 b", False)],
)
def test_has_space(text, expected):
    assert has_space(text) is expected


@pytest.mark.parametrize("char, expected", [(" ", True), ("\t", True), ("\n", False), ("a", False)])
def test_is_http_space(char, expected):
    assert is_http_space(char) is expected


@pytest.mark.parametrize(
    "text, expected", [("12345", True), ("", True), ("-1", False), ("1a", False)]
)
def test_is_unsigned_int_str(text, expected):
    assert is_unsigned_int_str(text) is expected


def test_pass_lws_removes_leading_blanks_only():
    assert pass_lws(" \t abc ") == "abc "
    assert pass_lws("abc") == "abc"


def test_strtrim_cuts_at_first_member():
    assert strtrim("  ab cd  ", " ") == "ab"
    assert strtrim("abc", " ") == "abc"
    assert strtrim("    ", " ") == ""


@pytest.mark.parametrize(
    "text, sep",
    [("a,,b,c", ","), (",,lead,trail,,", ","), ("one two\tthree", " \t"), ("", ","), ("none", ";")],
)
def test_split_invariants(text, sep):
    words = split(text, sep)
    assert all(words)
    assert all(not set(word) & set(sep) for word in words)
    assert "".join(words) == "".join(ch for ch in text if ch not in sep)


def test_split_values():
    assert split("a,,b,c", ",") == ["a", "b", "c"]
    assert split(",,,", ",") == []


@pytest.mark.parametrize("text, count", [("hello world", 5), ("abc", 0), ("abc", 10)])
def test_consume_round_trip(text, count):
    front, rest = consume(text, count)
    assert front + rest == text
    assert len(front) == min(count, len(text))


def test_consume_negative():
    with pytest.raises(ValueError):
        consume("abc", -1)


@pytest.mark.parametrize(
    "name, expected", [("index.html", "html"), ("archive.tar.gz", "gz"), ("README", "")]
)
def test_get_extension(name, expected):
    assert get_extension(name) == expected


@pytest.mark.parametrize("value", [0, 7, 42, 65536, -13])
def test_to_num_round_trip(value):
    assert to_num(str(value), int) == value
    assert to_num(f"  {value}  ", int) == value


def test_to_num_float():
    assert to_num("1.5", float) == 1.5


@pytest.mark.parametrize("text", ["", "12abc", "abc", "1 2", "  "])
def test_to_num_invalid(text):
    with pytest.raises(ValueError, match="Invalid input"):
        to_num(text, int)


@pytest.mark.parametrize("value", [0, 15, 255, 4096, 0xDEADBEEF])
def test_to_hex_num_round_trip(value):
    assert to_hex_num(format(value, "x")) == value
    assert to_hex_num("0x" + format(value, "X")) == value


def test_to_hex_num_not_hex():
    with pytest.raises(ValueError, match="not representing hex"):
        to_hex_num("xyz")


def test_to_hex_num_leftover():
    with pytest.raises(ValueError, match="Leftover"):
        to_hex_num("1fz")