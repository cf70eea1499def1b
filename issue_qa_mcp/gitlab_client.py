"""
GitLab REST API (v4) client and issue/commit URL parsing

Links to another host than the configured one are resolved to that host for the
call at hand only; the configured base URL is never modified.
"""
import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple, Union
from urllib.parse import quote, urlparse

from issue_qa_mcp.errors import invalid_params
from issue_qa_mcp.models import IssueComment, IssueData
from issue_qa_mcp.rest_client import RestApiClient

logger = logging.getLogger(__name__)

ISSUE_URL_PATTERN = re.compile(r"^https?://([^/]+)/(.+)/-/issues/(\d+)")
COMMIT_URL_PATTERN = re.compile(r"^https?://([^/]+)/(.+)/-/commit/([0-9a-fA-F]{7,40})")


@dataclass
class GitLabIssueRef:
    gitlab_url: str
    project_id: str
    issue_iid: int


@dataclass
class GitLabCommitRef:
    gitlab_url: str
    project_id: str
    sha: str


def resolve_gitlab_url(base_url: str, domain: str) -> str:
    """Base URL to use for a link on `domain`: the configured one, or the link's own host"""
    if urlparse(base_url).hostname != domain:
        return f"https://{domain}"
    return base_url


def _match_link(base_url: str, url: str, pattern, kind: str, example: str) -> Tuple[str, str, str]:
    match = pattern.match(url or "")
    if not match:
        raise invalid_params(f"URL de {kind} de GitLab inválido. Formato esperado: {example}")
    domain, project_path, last = match.groups()
    return resolve_gitlab_url(base_url, domain), project_path, last


def parse_gitlab_issue_url(base_url: str, url: str) -> GitLabIssueRef:
    gitlab_url, project_id, issue_iid = _match_link(
        base_url, url, ISSUE_URL_PATTERN, "issue", "https://gitlab.com/namespace/project/-/issues/123"
    )
    return GitLabIssueRef(gitlab_url=gitlab_url, project_id=project_id, issue_iid=int(issue_iid))


def parse_gitlab_commit_url(base_url: str, url: str) -> GitLabCommitRef:
    gitlab_url, project_id, sha = _match_link(
        base_url, url, COMMIT_URL_PATTERN, "commit", "https://gitlab.com/namespace/project/-/commit/<sha>"
    )
    return GitLabCommitRef(gitlab_url=gitlab_url, project_id=project_id, sha=sha)


def encode_project_id(project_id: Union[str, int]) -> str:
    """URL-encode a numeric id or namespace/project path for use in a REST path"""
    return quote(str(project_id), safe="")


def issue_data_from_gitlab(issue: Dict[str, Any], project: Dict[str, Any]) -> IssueData:
    """Map GitLab issue and project payloads onto IssueData"""
    return IssueData(
        title=issue.get("title") or "",
        description=issue.get("description") or "",
        labels=list(issue.get("labels") or []),
        assignees=[assignee.get("username", "") for assignee in issue.get("assignees") or []],
        author=(issue.get("author") or {}).get("username", ""),
        state=issue.get("state") or "",
        created_at=issue.get("created_at") or "",
        updated_at=issue.get("updated_at") or "",
        web_url=issue.get("web_url") or "",
        project_name=project.get("name") or "",
        iid=issue.get("iid") or 0,
    )


def comments_from_gitlab(notes: List[Dict[str, Any]]) -> List[IssueComment]:
    """User comments only: system notes (label changes, mentions...) are dropped"""
    comments = []
    for note in notes or []:
        if note.get("system"):
            continue
        author = note.get("author") or {}
        comments.append(IssueComment(
            author=author.get("name") or author.get("username", ""),
            created_at=note.get("created_at") or "",
            body=note.get("body") or "",
        ))
    return comments


class GitLabClient(RestApiClient):
    """Client for one GitLab instance's REST API"""

    provider_name = "GitLab"

    def __init__(self, gitlab_url: str, access_token: str):
        self.gitlab_url = gitlab_url.rstrip("/")
        super().__init__(f"{self.gitlab_url}/api/v4", access_token)

    def _headers(self) -> Dict[str, str]:
        headers = super()._headers()
        headers["Content-Type"] = "application/json"
        return headers

    async def get_issue_data(self, project_id: Union[str, int], issue_iid: int) -> IssueData:
        """Fetch issue and project concurrently and normalize them"""
        project = encode_project_id(project_id)
        logger.info(f"Fetching GitLab issue {project_id}#{issue_iid} from {self.gitlab_url}")
        issue, project_info = await asyncio.gather(
            self.aget(f"/projects/{project}/issues/{issue_iid}"),
            self.aget(f"/projects/{project}"),
        )
        return issue_data_from_gitlab(issue, project_info)

    async def get_issue_comments(self, project_id: Union[str, int], issue_iid: int) -> List[IssueComment]:
        notes = await self.aget(f"/projects/{encode_project_id(project_id)}/issues/{issue_iid}/notes")
        return comments_from_gitlab(notes)

    async def get_commit(self, project_id: Union[str, int], sha: str) -> Any:
        return await self.aget(f"/projects/{encode_project_id(project_id)}/repository/commits/{sha}")
