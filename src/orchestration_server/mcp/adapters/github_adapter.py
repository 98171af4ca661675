"""
GitHub Issues adapter.

Thin httpx-based implementation of the Issue Store contract on top of the
GitHub REST API v3. All methods are async. Authentication is a Bearer
token taken from the injected configuration.

Failures are raised as IssueStoreError with the status code and GitHub's
message; there are no retries here.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

import httpx

from orchestration_server.mcp.config import OrchestratorConfig
from orchestration_server.mcp.errors import IssueNotFoundError, IssueStoreError

from .models import Comment, Issue, IssueState, ListState

logger = logging.getLogger(__name__)

_ACCEPT = "application/vnd.github+json"
_API_VERSION = "2022-11-28"
_PAGE_SIZE = 100


def _issue_from_payload(data: Dict[str, Any]) -> Issue:
    labels = []
    for label in data.get("labels") or []:
        # The API returns label objects, but accepts and sometimes echoes plain names
        labels.append(label["name"] if isinstance(label, dict) else str(label))
    return Issue(
        number=data["number"],
        title=data.get("title") or "",
        body=data.get("body") or "",
        state=data.get("state", "open"),
        labels=labels,
        comments=data.get("comments", 0),
    )


def _comment_from_payload(issue_number: int, data: Dict[str, Any]) -> Comment:
    created_at = None
    if data.get("created_at"):
        created_at = datetime.fromisoformat(data["created_at"].replace("Z", "+00:00"))
    return Comment(issue_number=issue_number, body=data.get("body") or "", created_at=created_at)


def _error_detail(resp: httpx.Response) -> str:
    """Extract GitHub's error message from a response."""
    try:
        data = resp.json()
    except ValueError:
        return resp.text[:200] if resp.text else resp.reason_phrase
    if isinstance(data, dict) and data.get("message"):
        return data["message"]
    return str(data)


class GitHubIssueStore:
    """
    Async GitHub Issues client implementing the IssueStore contract.

    Parameters
    ----------
    config:
        Resolved server configuration (token, owner, repo, api_url).
    client:
        Optional pre-built httpx.AsyncClient (tests pass one with a mock transport).
    """

    def __init__(
        self, config: OrchestratorConfig, client: Optional[httpx.AsyncClient] = None
    ) -> None:
        self._repo_path = f"/repos/{config.owner}/{config.repo}"
        headers = {
            "Authorization": f"Bearer {config.token}",
            "Accept": _ACCEPT,
            "X-GitHub-Api-Version": _API_VERSION,
        }
        if client is None:
            client = httpx.AsyncClient(
                base_url=config.api_url,
                headers=headers,
                timeout=30,
                follow_redirects=True,
            )
        else:
            client.headers.update(headers)
        self._client = client

    async def __aenter__(self) -> "GitHubIssueStore":
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ------------------------------------------------------------------
    # Issue operations
    # ------------------------------------------------------------------

    async def create_issue(
        self, title: str, body: str, labels: Sequence[str] = ()
    ) -> Issue:
        """Create an open issue carrying ``labels``."""
        data = await self._request(
            "POST",
            f"{self._repo_path}/issues",
            json={"title": title, "body": body, "labels": list(labels)},
        )
        return _issue_from_payload(data)

    async def list_issues(
        self,
        state: ListState = "open",
        labels: Optional[Sequence[str]] = None,
        limit: Optional[int] = None,
    ) -> List[Issue]:
        """
        List issues in store order (newest first).

        ``labels`` is passed as GitHub's comma-joined filter, which requires
        every label to be present. Pull requests returned by the issues
        endpoint are dropped. With ``limit`` the page size shrinks to it and
        paging stops as soon as enough issues are collected.
        """
        page_size = min(limit, _PAGE_SIZE) if limit else _PAGE_SIZE
        params: Dict[str, Any] = {"state": state, "per_page": page_size, "page": 1}
        if labels:
            params["labels"] = ",".join(labels)

        issues: List[Issue] = []
        while True:
            data = await self._request("GET", f"{self._repo_path}/issues", params=params)
            if not data:
                break
            issues.extend(_issue_from_payload(item) for item in data if "pull_request" not in item)
            if limit and len(issues) >= limit:
                return issues[:limit]
            if len(data) < page_size:
                break
            params["page"] += 1
        return issues

    async def get_issue(self, number: int) -> Issue:
        data = await self._request("GET", f"{self._repo_path}/issues/{number}")
        return _issue_from_payload(data)

    async def update_issue(
        self,
        number: int,
        state: Optional[IssueState] = None,
        labels: Optional[Sequence[str]] = None,
    ) -> Issue:
        """Update state and/or labels. ``labels`` replaces the whole label set."""
        payload: Dict[str, Any] = {}
        if state is not None:
            payload["state"] = state
        if labels is not None:
            payload["labels"] = list(labels)
        data = await self._request("PATCH", f"{self._repo_path}/issues/{number}", json=payload)
        return _issue_from_payload(data)

    async def add_comment(self, number: int, body: str) -> Comment:
        data = await self._request(
            "POST", f"{self._repo_path}/issues/{number}/comments", json={"body": body}
        )
        return _comment_from_payload(number, data)

    # ------------------------------------------------------------------
    # HTTP helpers
    # ------------------------------------------------------------------

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        logger.debug("GitHub %s %s params=%s", method, path, params)
        try:
            resp = await self._client.request(method, path, params=params, json=json)
        except httpx.HTTPError as e:
            raise IssueStoreError(f"GitHub request {method} {path} failed: {e}") from e

        if resp.status_code == 404:
            raise IssueNotFoundError(
                f"GitHub {method} {path} failed with 404: {_error_detail(resp)}", status=404
            )
        if resp.is_error:
            raise IssueStoreError(
                f"GitHub {method} {path} failed with {resp.status_code}: {_error_detail(resp)}",
                status=resp.status_code,
            )
        if not resp.content:
            return None
        return resp.json()
