"""Renderers: where annotated repositories and pull requests are printed."""

import json
from abc import ABC, abstractmethod

from rich.console import Console
from rich.markup import escape

from ghprs.models import AnnotatedPR

NUMBER_WIDTH = 4


class Renderer(ABC):
    """Receives, in order, a repository header then its pull requests."""

    @abstractmethod
    def begin_repository(self, name: str, language: str) -> None:
        """Start the section of one admitted repository."""
        ...

    @abstractmethod
    def pull_request(self, annotated: AnnotatedPR) -> None:
        """Show one pull request of the current repository."""
        ...


def format_repository(name: str, language: str) -> str:
    """Rich markup for a repository header line."""
    return f"[bold bright_green]{escape(name)}[/] [blue]{escape(f'[{language}]')}[/]"


def format_pull_request(annotated: AnnotatedPR) -> str:
    """Rich markup for one pull request line.

    Layout: ``  #12  "Title" mergeable`` with ``very-old`` appended for
    stale pull requests.
    """
    pr = annotated.pull_request
    number = f"{pr.number:<{NUMBER_WIDTH}}"
    title = json.dumps(pr.title, ensure_ascii=False)
    line = f"  [bold white]#{number}[/][cyan]{escape(title)}[/] "
    if annotated.mergeable:
        line += "[green]mergeable[/]"
    else:
        line += "[red]unmergeable[/]"
    if annotated.stale:
        line += " [bold underline yellow]very-old[/]"
    return line


class ConsoleRenderer(Renderer):
    """Prints colorized lines to the terminal with rich."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(highlight=False)

    @property
    def console(self) -> Console:
        return self._console

    def begin_repository(self, name: str, language: str) -> None:
        self._console.print(format_repository(name, language))

    def pull_request(self, annotated: AnnotatedPR) -> None:
        self._console.print(format_pull_request(annotated))
