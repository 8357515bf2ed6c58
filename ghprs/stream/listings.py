"""Repository and pull request streams over a Git platform adapter."""

from functools import partial

from ghprs.adapters.base import GitPlatformAdapter
from ghprs.models import PR, Repository
from ghprs.stream.detail import DetailFetcher
from ghprs.stream.events import EventStream
from ghprs.stream.paged import PagedFetcher


def open_repository_stream(adapter: GitPlatformAdapter, org: str) -> EventStream[Repository]:
    """Stream every repository of the organization, page by page."""
    fetcher: PagedFetcher[Repository] = PagedFetcher(
        partial(adapter.list_repositories, org),
        label=f"{org} repositories",
    )
    return fetcher.start()


def open_pull_request_stream(adapter: GitPlatformAdapter, org: str, repo: str) -> EventStream[PR]:
    """Stream the detail record of every open pull request of a repository.

    Each listed page is expanded by fetching all of its pull requests'
    details concurrently; listing entries themselves are never emitted.
    """
    details: DetailFetcher[int, PR] = DetailFetcher(
        partial(adapter.get_pull_request, org, repo),
        label=f"{org}/{repo} pull request",
    )
    fetcher: PagedFetcher[PR] = PagedFetcher(
        partial(adapter.list_pull_requests, org, repo),
        label=f"{org}/{repo} pull requests",
        expand=lambda prs: details.fetch_all([pr.number for pr in prs]),
    )
    return fetcher.start()
