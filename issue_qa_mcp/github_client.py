"""
GitHub REST API client and issue/commit URL parsing
"""
import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from issue_qa_mcp.errors import invalid_params
from issue_qa_mcp.models import IssueComment, IssueData
from issue_qa_mcp.rest_client import RestApiClient
from issue_qa_mcp.settings import Settings

logger = logging.getLogger(__name__)

ISSUE_URL_PATTERN = re.compile(r"^https?://github\.com/([^/]+)/([^/]+)/issues/(\d+)")
COMMIT_URL_PATTERN = re.compile(r"^https?://github\.com/([^/]+)/([^/]+)/commit/([0-9a-fA-F]{7,40})")


@dataclass
class GitHubIssueRef:
    owner: str
    repo: str
    issue_number: int


@dataclass
class GitHubCommitRef:
    owner: str
    repo: str
    sha: str


def parse_github_issue_url(url: str) -> GitHubIssueRef:
    match = ISSUE_URL_PATTERN.match(url or "")
    if not match:
        raise invalid_params(
            "URL de issue de GitHub inválido. Formato esperado: https://github.com/owner/repo/issues/123"
        )
    return GitHubIssueRef(owner=match.group(1), repo=match.group(2), issue_number=int(match.group(3)))


def parse_github_commit_url(url: str) -> GitHubCommitRef:
    match = COMMIT_URL_PATTERN.match(url or "")
    if not match:
        raise invalid_params(
            "URL de commit de GitHub inválido. Formato esperado: https://github.com/owner/repo/commit/<sha>"
        )
    return GitHubCommitRef(owner=match.group(1), repo=match.group(2), sha=match.group(3))


def issue_data_from_github(issue: Dict[str, Any], repository: Dict[str, Any]) -> IssueData:
    """Map GitHub issue and repository payloads onto IssueData"""
    return IssueData(
        title=issue.get("title") or "",
        description=issue.get("body") or "",
        labels=[label.get("name", "") for label in issue.get("labels") or []],
        assignees=[assignee.get("login", "") for assignee in issue.get("assignees") or []],
        author=(issue.get("user") or {}).get("login", ""),
        state=issue.get("state") or "",
        created_at=issue.get("created_at") or "",
        updated_at=issue.get("updated_at") or "",
        web_url=issue.get("html_url") or "",
        project_name=repository.get("name") or "",
        iid=issue.get("number") or 0,
    )


def comments_from_github(comments: List[Dict[str, Any]]) -> List[IssueComment]:
    return [
        IssueComment(
            author=(comment.get("user") or {}).get("login", ""),
            created_at=comment.get("created_at") or "",
            body=comment.get("body") or "",
        )
        for comment in comments or []
    ]


class GitHubClient(RestApiClient):
    """Client for the GitHub REST API"""

    provider_name = "GitHub"

    def __init__(self, access_token: str, api_base_url: Optional[str] = None):
        super().__init__(api_base_url or Settings.GITHUB_API_URL, access_token)

    def _headers(self) -> Dict[str, str]:
        headers = super()._headers()
        headers["Accept"] = "application/vnd.github+json"
        return headers

    async def get_issue_data(self, owner: str, repo: str, issue_number: int) -> IssueData:
        """Fetch issue and repository concurrently and normalize them"""
        logger.info(f"Fetching GitHub issue {owner}/{repo}#{issue_number}")
        issue, repository = await asyncio.gather(
            self.aget(f"/repos/{owner}/{repo}/issues/{issue_number}"),
            self.aget(f"/repos/{owner}/{repo}"),
        )
        return issue_data_from_github(issue, repository)

    async def get_issue_comments(self, owner: str, repo: str, issue_number: int) -> List[IssueComment]:
        comments = await self.aget(f"/repos/{owner}/{repo}/issues/{issue_number}/comments")
        return comments_from_github(comments)

    async def get_commit(self, owner: str, repo: str, sha: str) -> Any:
        return await self.aget(f"/repos/{owner}/{repo}/commits/{sha}")
