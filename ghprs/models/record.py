"""Annotated output records handed to a renderer."""

from dataclasses import dataclass
from typing import Iterator

from ghprs.models.pr import PR
from ghprs.models.repository import Repository


@dataclass(frozen=True)
class AnnotatedPR:
    """Pull request with its display flags."""

    pull_request: PR
    mergeable: bool
    stale: bool


@dataclass
class AnnotatedRecord:
    """Repository with a lazily produced sequence of annotated pull requests.

    ``pull_requests`` is a one-shot iterator backed by a live stream; consume
    it before advancing to the next record.
    """

    repository: Repository
    pull_requests: Iterator[AnnotatedPR]

    @property
    def language(self) -> str:
        return self.repository.display_language
