import random

import pytest

from webserv.fortune import (
    FORTUNES,
    SHORT_FORTUNES,
    choose_fortune,
    get_query_param,
    main,
    render_error,
    render_result,
    respond,
)


@pytest.mark.parametrize(
    "query, param, expected",
    [
        ("name=alice", "name", "alice"),
        ("name=alice&x=1", "name", "alice"),
        ("x=1&name=bob", "name", "bob"),
        ("x=1", "name", ""),
        ("", "name", ""),
        ("name=", "name", ""),
    ],
)
def test_get_query_param(query, param, expected):
    assert get_query_param(query, param) == expected


def test_choose_fortune_is_from_list():
    rng = random.Random(1)
    for _ in range(50):
        assert choose_fortune(FORTUNES, rng) in FORTUNES


def test_choose_fortune_is_reproducible_with_seed():
    first = [choose_fortune(SHORT_FORTUNES, random.Random(7)) for _ in range(3)]
    second = [choose_fortune(SHORT_FORTUNES, random.Random(7)) for _ in range(3)]
    assert first == second


def test_choose_fortune_empty_raises():
    with pytest.raises(IndexError):
        choose_fortune([], random.Random(0))


def test_render_result_headers_and_greeting():
    page = render_result("alice", "good")
    assert page.startswith("Content-Type: text/html\r\nStatus: 200 ok\r\n\r\n")
    assert "<h1>Welcome, alice!</h1>\n" in page
    assert "<h1>Your Fortune : good</h1>\n" in page
    assert page.endswith("</html>\n")


def test_render_result_without_name():
    page = render_result("", "fine")
    assert "<h1>Welcome!</h1>\n" in page
    assert "Welcome, " not in page


def test_render_error():
    page = render_error()
    assert page.startswith("Content-Type: text/html\r\nStatus: 600 Invalid data\r\n\r\n")
    assert "<h1>Invalid data typed</h1>\n" in page


def test_respond_non_get_is_error():
    assert respond({"REQUEST_METHOD": "POST"}) == render_error()
    assert respond({}) == render_error()


def test_respond_get_uses_name_and_fortune():
    page = respond(
        {"REQUEST_METHOD": "GET", "QUERY_STRING": "name=carol&x=2"},
        FORTUNES,
        random.Random(3),
    )
    assert "<h1>Welcome, carol!</h1>" in page
    assert any(f"<h1>Your Fortune : {fortune}</h1>" in page for fortune in FORTUNES)


def test_respond_same_seed_same_page():
    env = {"REQUEST_METHOD": "GET", "QUERY_STRING": "name=dave"}
    first = respond(env, FORTUNES, random.Random(5))
    second = respond(env, FORTUNES, random.Random(5))
    assert first == second
    expected_fortune = choose_fortune(FORTUNES, random.Random(5))
    assert first == render_result("dave", expected_fortune)


def test_main_writes_page(monkeypatch, capsys):
    monkeypatch.setenv("REQUEST_METHOD", "GET")
    monkeypatch.setenv("QUERY_STRING", "name=erin")
    assert main() == 0
    out = capsys.readouterr().out
    assert out.startswith("Content-Type: text/html\r\nStatus: 200 ok\r\n\r\n")
    assert "<h1>Welcome, erin!</h1>" in out


def test_main_error_page(monkeypatch, capsys):
    monkeypatch.setenv("REQUEST_METHOD", "DELETE")
    assert main([]) == 0
    assert capsys.readouterr().out == render_error()