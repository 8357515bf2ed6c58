"""Errors reported by the fetch pipeline.

These travel as values on a stream (ErrorEvent) and are never raised inside
producer threads; the lister decides whether one is fatal.
"""

from ghprs.adapters.base import GitPlatformError


class FetchError(GitPlatformError):
    """A listing page or a detail record could not be fetched."""

    def __init__(self, message: str, cause: BaseException | None = None, has_next: bool = False) -> None:
        super().__init__(message, status_code=getattr(cause, "status_code", None), has_next=has_next)
        self.cause = cause


class PageFetchError(FetchError):
    """A single page of a listing failed."""

    def __init__(self, label: str, page: int, cause: BaseException) -> None:
        super().__init__(
            f"{label} page {page}: {cause}",
            cause=cause,
            has_next=bool(getattr(cause, "has_next", False)),
        )
        self.page = page


class DetailFetchError(FetchError):
    """A single item's detail fetch failed."""

    def __init__(self, label: str, identifier: object, cause: BaseException) -> None:
        super().__init__(f"{label} {identifier}: {cause}", cause=cause)
        self.identifier = identifier
