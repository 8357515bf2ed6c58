"""Git platform adapters."""

from ghprs.adapters.base import GitPlatformAdapter, GitPlatformError
from ghprs.adapters.github import GitHubAdapter

__all__ = ["GitPlatformAdapter", "GitPlatformError", "GitHubAdapter"]
