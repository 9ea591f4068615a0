"""A CGI program that greets a visitor by name with a random fortune."""

from __future__ import annotations

import os
import random
import sys
from collections.abc import Mapping, Sequence

FORTUNES: tuple[str, ...] = (
    "Nothing astonishes men so much as common sense and plain dealing.",
    "The greatest risk is not taking one.",
    "You are very talented in many ways.",
    "The man or woman you desire feels the same about you.",
    "You already know the answer to the questions lingering inside your head.",
    "You learn from your mistakes... You will learn a lot today.",
    "Never give up. You're not a failure if you don't give up.",
    "Be on the lookout for coming events; They cast their shadows beforehand.",
)

SHORT_FORTUNES: tuple[str, ...] = ("fine", "good", "", "awesome")

_STYLE = (
    "<style>\n"
    "body {\n"
    "  background-color: #f5f5f5;\n"
    "  font-family: Arial, sans-serif;\n"
    "  text-align: center;\n"
    "}\n"
    "h1 {\n"
    "  color: #333333;\n"
    "}\n"
    "p {\n"
    "  color: #666666;\n"
    "  font-size: 18px;\n"
    "}\n"
    "</style>\n"
)


def get_query_param(query: str, param: str) -> str:
    """Return the value of the first ``param=`` in the query, or an empty string."""
    start = query.find(param + "=")
    if start < 0:
        return ""
    start += len(param) + 1
    end = query.find("&", start)
    return query[start:] if end < 0 else query[start:end]


def choose_fortune(
    fortunes: Sequence[str] = FORTUNES, rng: random.Random | None = None
) -> str:
    """Pick one fortune at random."""
    return (rng or random.Random()).choice(fortunes)


def render_result(name: str, fortune: str) -> str:
    """Return the CGI output of the fortune page."""
    greeting = f"<h1>Welcome, {name}!</h1>\n" if name else "<h1>Welcome!</h1>\n"
    return (
        "Content-Type: text/html\r\n"
        "Status: 200 ok\r\n\r\n"
        "<html>\n"
        "<head>\n"
        "<title>Fortune Cookie</title>\n"
        + _STYLE
        + "</head>\n"
        "<body>\n"
        + greeting
        + f"<h1>Your Fortune : {fortune}</h1>\n"
        '<img src="../fortune/img/fortune_cookie_image.jpg" alt="Fortune Cookie Image">\n'
        '<img src="fortune_cookie_image.jpg" alt="Fortune Cookie Image">\n'
        '<p><a href="index.html">Back to Index</a></p>\n'
        "</body>\n"
        "</html>\n"
    )


def render_error() -> str:
    """Return the CGI output for a request that is not a GET."""
    return (
        "Content-Type: text/html\r\n"
        "Status: 600 Invalid data\r\n\r\n"
        "<html>\n"
        "<head>\n"
        "<title>Invalid data</title>\n"
        "</head>\n"
        "<h1>Invalid data typed</h1>\n"
        "</html>\n"
    )


def respond(
    environ: Mapping[str, str] | None = None,
    fortunes: Sequence[str] = FORTUNES,
    rng: random.Random | None = None,
) -> str:
    """Build the CGI output from the request's meta-variables."""
    env = os.environ if environ is None else environ
    if env.get("REQUEST_METHOD", "") != "GET":
        return render_error()
    name = get_query_param(env.get("QUERY_STRING", ""), "name")
    return render_result(name, choose_fortune(fortunes, rng))


def main(argv: Sequence[str] | None = None) -> int:
    """Write the CGI response for the current environment to standard output."""
    sys.stdout.write(respond())
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())