"""Pull request lister: walks an organization's repositories and their open
pull requests and hands annotated results to a renderer.

Repositories are processed one at a time. For each admitted repository a
pull request stream is opened and drained before the next repository is
taken from the repository stream. Any fetch error is fatal under the
default ``abort`` policy; with ``continue`` it is logged and skipped.
"""

import logging
from contextlib import closing
from datetime import UTC, datetime, timedelta
from typing import Iterable, Iterator, Literal

from ghprs.adapters.base import GitPlatformAdapter
from ghprs.models import PR, AnnotatedPR, AnnotatedRecord
from ghprs.render import Renderer
from ghprs.stream import ErrorEvent, EventStream, FetchError, open_pull_request_stream, open_repository_stream

LOG = logging.getLogger("ghprs.lister")

STALE_DAYS = 30

ErrorPolicy = Literal["abort", "continue"]


def stale_threshold(now: datetime | None = None, days: int = STALE_DAYS) -> datetime:
    """Start of the current day minus ``days`` days (UTC unless ``now`` says
    otherwise)."""
    now = now or datetime.now(UTC)
    start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return start_of_day - timedelta(days=days)


def annotate(pr: PR, stale_before: datetime) -> AnnotatedPR:
    """Attach display flags. Unknown mergeability counts as not mergeable."""
    return AnnotatedPR(
        pull_request=pr,
        mergeable=bool(pr.mergeable),
        stale=pr.updated_at < stale_before,
    )


class PullRequestLister:
    """Lists open pull requests of every repository in an organization."""

    def __init__(
        self,
        adapter: GitPlatformAdapter,
        organization: str,
        renderer: Renderer | None = None,
        stale_before: datetime | None = None,
        on_error: ErrorPolicy = "abort",
    ) -> None:
        if on_error not in ("abort", "continue"):
            raise ValueError(f"Unknown error policy: {on_error!r}")
        self._adapter = adapter
        self._organization = organization
        self._renderer = renderer
        self.stale_before = stale_before or stale_threshold()
        self.on_error = on_error
        self.errors: list[FetchError] = []

    def _handle_error(self, error: FetchError) -> None:
        if self.on_error == "abort":
            raise error
        LOG.warning("Skipping after fetch error: %s", error)
        self.errors.append(error)

    def _annotated(self, stream: EventStream[PR]) -> Iterator[AnnotatedPR]:
        for event in stream:
            if isinstance(event, ErrorEvent):
                self._handle_error(event.error)
                continue
            yield annotate(event.item, self.stale_before)

    def records(self, whitelist: Iterable[str] = ()) -> Iterator[AnnotatedRecord]:
        """Yield one AnnotatedRecord per admitted repository.

        A non-empty whitelist admits only the named repositories; the others
        are skipped without opening their pull request stream. A record's
        pull requests left unconsumed are drained before the next repository
        is taken.
        """
        admitted = set(whitelist)
        self.errors = []
        repos = open_repository_stream(self._adapter, self._organization)
        try:
            for event in repos:
                if isinstance(event, ErrorEvent):
                    self._handle_error(event.error)
                    continue
                repo = event.item
                if admitted and repo.name not in admitted:
                    LOG.debug("Skipping %s: not in whitelist", repo.name)
                    continue
                LOG.info("Listing pull requests of %s/%s", self._organization, repo.name)
                prs = open_pull_request_stream(self._adapter, self._organization, repo.name)
                pull_requests = self._annotated(prs)
                try:
                    yield AnnotatedRecord(repository=repo, pull_requests=pull_requests)
                    for _ in pull_requests:
                        pass
                finally:
                    pull_requests.close()
                    prs.cancel()
        finally:
            repos.cancel()

    def run(self, whitelist: Iterable[str] = ()) -> list[FetchError]:
        """Render every admitted repository and its pull requests.

        Raises the first FetchError under the ``abort`` policy; otherwise
        returns the errors that were skipped.
        """
        if self._renderer is None:
            raise ValueError("run() needs a renderer")
        with closing(self.records(whitelist)) as records:
            for record in records:
                self._renderer.begin_repository(record.repository.name, record.language)
                for annotated in record.pull_requests:
                    self._renderer.pull_request(annotated)
        return list(self.errors)
