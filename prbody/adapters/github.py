"""GitHub API adapter."""

import logging
from typing import Any, Dict

import requests

from prbody.adapters.base import GitPlatformAdapter, GitPlatformError
from prbody.models import PullRequest

logger = logging.getLogger(__name__)


def _pr_from_api(data: Dict[str, Any]) -> PullRequest:
    return PullRequest(number=data["number"], body=data.get("body"))


class GitHubAdapter(GitPlatformAdapter):
    """GitHub REST API implementation."""

    def __init__(self, token: str, api_url: str = "https://api.github.com") -> None:
        self._api_url = api_url.rstrip("/")
        self._session = requests.Session()
        self._session.headers["Authorization"] = f"token {token}"
        self._session.headers["Accept"] = "application/vnd.github.v3+json"

    def _request(
        self,
        method: str,
        path: str,
        json: Dict[str, Any] | None = None,
    ) -> requests.Response:
        url = f"{self._api_url}{path}" if path.startswith("/") else f"{self._api_url}/{path}"
        logger.debug("%s %s", method, url)
        resp = self._session.request(method, url, json=json, timeout=30)
        if resp.status_code >= 400:
            msg = resp.text or resp.reason or str(resp.status_code)
            try:
                msg = resp.json().get("message", msg)
            except (ValueError, AttributeError):
                pass
            raise GitPlatformError(f"{resp.status_code}: {msg}")
        return resp

    def get_pr(self, repo: str, pr_number: int) -> PullRequest:
        resp = self._request("GET", f"/repos/{repo}/pulls/{pr_number}")
        return _pr_from_api(resp.json())

    def update_pr_body(self, repo: str, pr_number: int, body: str) -> PullRequest:
        resp = self._request("PATCH", f"/repos/{repo}/pulls/{pr_number}", json={"body": body})
        return _pr_from_api(resp.json())
