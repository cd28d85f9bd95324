"""Thin GitHub REST client for the organization-level calls the jobs need."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import requests

from ..errors import GitHubAPIError
from ..logging import get_logger

API_URL = "https://api.github.com"
USER_AGENT = "plugins-automation"
REQUEST_TIMEOUT = 30


class GitHubClient:
    """Authenticated wrapper around a ``requests.Session``."""

    def __init__(
        self,
        token: str,
        *,
        api_url: str = API_URL,
        session: requests.Session | None = None,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Accept": "application/vnd.github+json",
                "User-Agent": USER_AGENT,
                "Authorization": f"Bearer {token}",
            }
        )
        self.logger = get_logger("github")

    def list_org_repos(self, org: str, *, per_page: int = 100) -> List[Dict[str, Any]]:
        """Return the first page of the organization's repositories."""
        payload = self._request(
            "GET",
            f"/orgs/{org}/repos",
            params={"type": "all", "per_page": per_page},
        )
        if not isinstance(payload, list):
            raise GitHubAPIError(f"Unexpected repository listing for {org}")
        return payload

    def create_pull_request(
        self,
        org: str,
        repo: str,
        *,
        title: str,
        body: str,
        head: str,
        base: str,
    ) -> Dict[str, Any]:
        payload = self._request(
            "POST",
            f"/repos/{org}/{repo}/pulls",
            json={"title": title, "body": body, "head": head, "base": base},
        )
        self.logger.info("Created PR #%s for %s", payload.get("number"), repo)
        return payload

    def set_default_branch(self, org: str, repo: str, branch: str) -> Dict[str, Any]:
        return self._request("PATCH", f"/repos/{org}/{repo}", json={"default_branch": branch})

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        url = f"{self.api_url}{path}"
        try:
            resp = self.session.request(method, url, params=params, json=json, timeout=self.timeout)
        except requests.RequestException as exc:
            raise GitHubAPIError(f"{method} {url} failed: {exc}") from exc
        if resp.status_code >= 400:
            raise GitHubAPIError(
                f"HTTP {resp.status_code} for {method} {url}: {_error_message(resp)}",
                status_code=resp.status_code,
            )
        try:
            return resp.json()
        except ValueError as exc:
            raise GitHubAPIError(f"Invalid JSON from {url}") from exc


def _error_message(resp: requests.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return (resp.text or "")[:300]
    if isinstance(body, dict):
        return str(body.get("message") or body.get("error") or "")
    return ""


__all__ = ["API_URL", "GitHubClient"]
