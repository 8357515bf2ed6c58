"""GitHub API adapter."""

from datetime import datetime
from typing import Any, Dict

import requests

from ghprs.adapters.base import GitPlatformAdapter, GitPlatformError
from ghprs.models import PR, Page, Repository


def _parse_iso(s: str) -> datetime:
    return datetime.fromisoformat(s.replace("Z", "+00:00"))


def _repository_from_api(data: Dict[str, Any]) -> Repository:
    return Repository(
        name=data["name"],
        language=data.get("language"),
    )


def _pr_from_api(data: Dict[str, Any]) -> PR:
    return PR(
        number=data["number"],
        title=data.get("title") or "",
        mergeable=data.get("mergeable"),
        updated_at=_parse_iso(data.get("updated_at") or data["created_at"]),
    )


def _has_next(resp: requests.Response) -> bool:
    """GitHub advertises further pages in the Link header (rel="next")."""
    links = getattr(resp, "links", None) or {}
    return "next" in links


class GitHubAdapter(GitPlatformAdapter):
    """GitHub API implementation."""

    def __init__(
        self,
        token: str,
        api_url: str = "https://api.github.com",
        per_page: int = 30,
        timeout: int = 30,
    ) -> None:
        self._api_url = api_url.rstrip("/")
        self._per_page = per_page
        self._timeout = timeout
        self._session = requests.Session()
        self._session.headers["Authorization"] = f"token {token}"
        self._session.headers["Accept"] = "application/vnd.github.v3+json"

    def _request(
        self,
        method: str,
        path: str,
        params: Dict[str, Any] | None = None,
    ) -> requests.Response:
        url = f"{self._api_url}{path}" if path.startswith("/") else f"{self._api_url}/{path}"
        try:
            resp = self._session.request(method, url, params=params, timeout=self._timeout)
        except requests.RequestException as e:
            raise GitPlatformError(f"{method} {path}: {e}") from e
        if resp.status_code >= 400:
            msg = resp.text or resp.reason or str(resp.status_code)
            try:
                msg = resp.json().get("message", msg)
            except (ValueError, AttributeError):
                pass
            raise GitPlatformError(
                f"{method} {url}: {resp.status_code} {msg}",
                status_code=resp.status_code,
                has_next=_has_next(resp),
            )
        return resp

    def _list_page(self, path: str, page: int, params: Dict[str, Any] | None = None) -> tuple[list, bool]:
        query: Dict[str, Any] = {"page": page, "per_page": self._per_page}
        if params:
            query.update(params)
        resp = self._request("GET", path, params=query)
        return resp.json() or [], _has_next(resp)

    def list_repositories(self, org: str, page: int) -> Page[Repository]:
        data, has_next = self._list_page(f"/orgs/{org}/repos", page)
        return Page[Repository](items=[_repository_from_api(d) for d in data], has_next=has_next)

    def list_pull_requests(self, org: str, repo: str, page: int) -> Page[PR]:
        data, has_next = self._list_page(f"/repos/{org}/{repo}/pulls", page, params={"state": "open"})
        return Page[PR](items=[_pr_from_api(d) for d in data], has_next=has_next)

    def get_pull_request(self, org: str, repo: str, number: int) -> PR:
        resp = self._request("GET", f"/repos/{org}/{repo}/pulls/{number}")
        return _pr_from_api(resp.json())
