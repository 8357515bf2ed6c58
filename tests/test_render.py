"""Tests for ConsoleRenderer output layout."""

import io
from datetime import UTC, datetime

from rich.console import Console

from ghprs.models import PR, AnnotatedPR
from ghprs.render import ConsoleRenderer, format_pull_request, format_repository


def _console() -> tuple[Console, io.StringIO]:
    buf = io.StringIO()
    return Console(file=buf, force_terminal=False, color_system=None, width=200, highlight=False), buf


def _annotated(number: int, title: str, mergeable: bool, stale: bool) -> AnnotatedPR:
    pr = PR(number=number, title=title, mergeable=mergeable, updated_at=datetime(2026, 10, 1, tzinfo=UTC))
    return AnnotatedPR(pull_request=pr, mergeable=mergeable, stale=stale)


def test_repository_header_shows_language_in_brackets() -> None:
    console, buf = _console()
    ConsoleRenderer(console).begin_repository("web", "Go")
    assert buf.getvalue() == "web [Go]\n"


def test_pull_request_line_layout() -> None:
    """Number padded to four columns, quoted title, mergeability word."""
    console, buf = _console()
    renderer = ConsoleRenderer(console)
    renderer.pull_request(_annotated(12, "Fix bug", True, False))
    renderer.pull_request(_annotated(7, "Old work", False, True))
    assert buf.getvalue().splitlines() == [
        '  #12  "Fix bug" mergeable',
        '  #7   "Old work" unmergeable very-old',
    ]


def test_markup_in_user_text_is_escaped() -> None:
    """Titles and names that look like rich markup are printed literally."""
    console, buf = _console()
    renderer = ConsoleRenderer(console)
    renderer.begin_repository("[bold]repo", "lang")
    renderer.pull_request(_annotated(1, "[wip] thing", False, False))
    lines = buf.getvalue().splitlines()
    assert lines[0] == "[bold]repo [lang]"
    assert lines[1] == '  #1   "[wip] thing" unmergeable'


def test_format_uses_colors() -> None:
    """Markup carries the colour scheme of each part."""
    assert "bright_green" in format_repository("web", "Go")
    line = format_pull_request(_annotated(3, "t", True, True))
    assert "[green]mergeable" in line
    assert "[bold underline yellow]very-old" in line
    assert "[red]unmergeable" in format_pull_request(_annotated(3, "t", False, False))
