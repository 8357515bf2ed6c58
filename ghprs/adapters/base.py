"""Abstract base for Git platform adapters."""

from abc import ABC, abstractmethod

from ghprs.models import PR, Page, Repository


class GitPlatformError(Exception):
    """Raised when a Git platform API call fails.

    ``has_next`` is True when the failed response still advertised a
    following page, so a paginated listing can carry on past it.
    """

    def __init__(self, message: str, status_code: int | None = None, has_next: bool = False) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.has_next = has_next


class GitPlatformAdapter(ABC):
    """Abstract interface for the three listing calls the lister needs."""

    @abstractmethod
    def list_repositories(self, org: str, page: int) -> Page[Repository]:
        """Fetch one page of the organization's repositories."""
        ...

    @abstractmethod
    def list_pull_requests(self, org: str, repo: str, page: int) -> Page[PR]:
        """Fetch one page of a repository's open pull requests."""
        ...

    @abstractmethod
    def get_pull_request(self, org: str, repo: str, number: int) -> PR:
        """Fetch one pull request with its detail fields (mergeable)."""
        ...
