"""Tests for DetailFetcher fan-out and the pull request stream built on it."""

import threading
import time
from datetime import UTC, datetime

from ghprs.models import PR, Page
from ghprs.stream import DetailFetcher, DetailFetchError, ErrorEvent, ItemEvent, open_pull_request_stream

UPDATED = datetime(2026, 10, 1, tzinfo=UTC)


def _pr(number: int, mergeable: bool | None = None) -> PR:
    return PR(number=number, title=f"PR {number}", mergeable=mergeable, updated_at=UPDATED)


def test_fetch_all_runs_fetches_concurrently() -> None:
    """Every identifier of a page is fetched at the same time."""
    barrier = threading.Barrier(3, timeout=2)

    def detail_call(ident: int) -> str:
        barrier.wait()
        return f"detail-{ident}"

    events = list(DetailFetcher(detail_call).fetch_all([1, 2, 3]))

    assert all(isinstance(e, ItemEvent) for e in events)
    assert sorted(e.item for e in events) == ["detail-1", "detail-2", "detail-3"]


def test_failed_fetch_does_not_stop_siblings() -> None:
    """One failure is reported on its own; the other details are delivered."""
    finished = []

    def detail_call(ident: int) -> str:
        if ident == 1:
            raise RuntimeError("gone")
        time.sleep(0.05)
        finished.append(ident)
        return f"detail-{ident}"

    events = list(DetailFetcher(detail_call, label="widget").fetch_all([1, 2, 3]))

    items = sorted(e.item for e in events if isinstance(e, ItemEvent))
    errors = [e.error for e in events if isinstance(e, ErrorEvent)]
    assert items == ["detail-2", "detail-3"]
    assert sorted(finished) == [2, 3]
    assert len(errors) == 1
    assert isinstance(errors[0], DetailFetchError)
    assert errors[0].identifier == 1
    assert "widget 1" in str(errors[0])


def test_fetch_all_waits_for_every_fetch() -> None:
    """Iteration only ends once the slowest fetch has resolved."""
    resolved = []

    def detail_call(ident: int) -> int:
        time.sleep(0.01 * ident)
        resolved.append(ident)
        return ident

    for _ in DetailFetcher(detail_call).fetch_all([5, 1, 3]):
        pass

    assert sorted(resolved) == [1, 3, 5]


def test_fetch_all_empty_page() -> None:
    """No identifiers, no events."""
    assert list(DetailFetcher(lambda ident: ident).fetch_all([])) == []


def test_pull_request_stream_resolves_page_before_next(make_adapter) -> None:
    """Details of page 1 are all delivered before any detail of page 2."""

    def slow(number: int):
        def fetch() -> PR:
            time.sleep(0.05)
            return _pr(number, mergeable=True)

        return fetch

    adapter = make_adapter(
        repo_pages=[Page()],
        pr_pages={"web": [Page(items=[_pr(1), _pr(2)], has_next=True), Page(items=[_pr(3)])]},
        details={("web", 1): slow(1), ("web", 2): slow(2), ("web", 3): _pr(3, mergeable=False)},
    )

    events = list(open_pull_request_stream(adapter, "acme", "web"))

    numbers = [e.item.number for e in events]
    assert sorted(numbers[:2]) == [1, 2]
    assert numbers[2] == 3
    # listing entries are never emitted, only detail records
    assert [e.item.mergeable for e in events] == [True, True, False]


def test_pull_request_stream_reports_detail_errors(make_adapter) -> None:
    """A failing detail fetch shows up as an ErrorEvent on the stream."""
    adapter = make_adapter(
        repo_pages=[Page()],
        pr_pages={"web": [Page(items=[_pr(1), _pr(2)])]},
        details={("web", 1): _pr(1), ("web", 2): RuntimeError("boom")},
    )

    events = list(open_pull_request_stream(adapter, "acme", "web"))

    errors = [e.error for e in events if isinstance(e, ErrorEvent)]
    assert [e.item.number for e in events if isinstance(e, ItemEvent)] == [1]
    assert len(errors) == 1
    assert errors[0].identifier == 2
    assert "acme/web pull request 2" in str(errors[0])
