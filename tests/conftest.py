"""Shared fakes: an in-memory Git platform adapter and a recording renderer."""

import threading
from datetime import UTC, datetime
from typing import Any, Callable, Dict, List, Tuple

import pytest

from ghprs.adapters.base import GitPlatformAdapter
from ghprs.models import PR, AnnotatedPR, Page, Repository
from ghprs.render import Renderer

NOW = datetime(2026, 10, 18, 15, 30, tzinfo=UTC)


def _answer(value: Any) -> Any:
    if isinstance(value, BaseException):
        raise value
    if callable(value):
        return value()
    return value


class FakeAdapter(GitPlatformAdapter):
    """Answers listing calls from prepared pages (Page, exception or callable)."""

    def __init__(
        self,
        repo_pages: List[Any],
        pr_pages: Dict[str, List[Any]] | None = None,
        details: Dict[Tuple[str, int], Any] | None = None,
    ) -> None:
        self.repo_pages = repo_pages
        self.pr_pages = pr_pages or {}
        self.details = details or {}
        self.calls: List[tuple] = []
        self._lock = threading.Lock()

    def _record(self, *call: Any) -> None:
        with self._lock:
            self.calls.append(call)

    def list_repositories(self, org: str, page: int) -> Page[Repository]:
        self._record("list_repositories", org, page)
        if page > len(self.repo_pages):
            return _answer(self.repo_pages[-1])
        return _answer(self.repo_pages[page - 1])

    def list_pull_requests(self, org: str, repo: str, page: int) -> Page[PR]:
        self._record("list_pull_requests", org, repo, page)
        pages = self.pr_pages.get(repo) or [Page()]
        return _answer(pages[page - 1])

    def get_pull_request(self, org: str, repo: str, number: int) -> PR:
        self._record("get_pull_request", org, repo, number)
        return _answer(self.details[(repo, number)])

    def opened_pull_requests(self) -> List[str]:
        return [c[2] for c in self.calls if c[0] == "list_pull_requests" and c[3] == 1]


class RecordingRenderer(Renderer):
    """Keeps renderer events as tuples for assertions."""

    def __init__(self) -> None:
        self.events: List[tuple] = []

    def begin_repository(self, name: str, language: str) -> None:
        self.events.append(("begin_repository", name, language))

    def pull_request(self, annotated: AnnotatedPR) -> None:
        pr = annotated.pull_request
        self.events.append(("pull_request", pr.number, pr.title, annotated.mergeable, annotated.stale))


@pytest.fixture
def make_adapter() -> Callable[..., FakeAdapter]:
    return FakeAdapter


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep real credentials from the environment out of every test."""
    for key in (
        "GITHUB_TOKEN",
        "GITHUB_TOKEN_FILE",
        "GITHUB_ORGANIZATION",
        "GITHUB_API_URL",
        "GITHUB_PER_PAGE",
        "GITHUB_TIMEOUT",
        "LISTER_STALE_DAYS",
        "LISTER_ON_ERROR",
        "LOGGING_LEVEL",
        "LOGGING_FORMAT",
    ):
        monkeypatch.delenv(key, raising=False)
