"""
GitLab tools: QA analysis, QA summary, commit lookup and raw API access
"""
from typing import Any, Dict, List, Optional, Union

from pydantic import Field

from issue_qa_mcp.gitlab_client import GitLabClient, parse_gitlab_commit_url, parse_gitlab_issue_url
from issue_qa_mcp.qa_analyzer import analyze_issue_for_qa
from issue_qa_mcp.report_formatter import format_qa_analysis, format_qa_summary
from issue_qa_mcp.tool_registry import ToolDefinition, ToolInput, to_json

ACCESS_TOKEN_DESCRIPTION = "GitLab access token (optional, defaults to GITLAB_ACCESS_TOKEN)"


class AnalyzeGitLabIssueInput(ToolInput):
    issue_url: str = Field(alias="issueUrl", description="GitLab issue URL, e.g. https://gitlab.com/namespace/project/-/issues/123")
    access_token: Optional[str] = Field(None, alias="accessToken", description=ACCESS_TOKEN_DESCRIPTION)


class GitLabIssueSummaryInput(ToolInput):
    project_id: Union[int, str] = Field(alias="projectId", description="Project id or namespace/project path")
    issue_iid: int = Field(alias="issueIid", description="Project-local issue IID")
    access_token: Optional[str] = Field(None, alias="accessToken", description=ACCESS_TOKEN_DESCRIPTION)


class GitLabCommitByUrlInput(ToolInput):
    commit_url: str = Field(alias="commitUrl", description="GitLab commit URL, e.g. https://gitlab.com/namespace/project/-/commit/<sha>")
    access_token: Optional[str] = Field(None, alias="accessToken", description=ACCESS_TOKEN_DESCRIPTION)


class GitLabCommitInput(ToolInput):
    project_id: Union[int, str] = Field(alias="projectId", description="Project id or namespace/project path")
    sha: str = Field(description="Commit SHA")
    access_token: Optional[str] = Field(None, alias="accessToken", description=ACCESS_TOKEN_DESCRIPTION)


class GitLabApiGetInput(ToolInput):
    endpoint: str = Field(description="Path under /api/v4, e.g. /projects or /groups")
    params: Optional[Dict[str, Any]] = Field(None, description="Query parameters")
    access_token: Optional[str] = Field(None, alias="accessToken", description=ACCESS_TOKEN_DESCRIPTION)


def create_gitlab_tools(gitlab_url: str, access_token: str) -> List[ToolDefinition]:
    """Build the GitLab tool set bound to a configured instance URL and default token.

    Issue and commit links on another host are served from that host for the call
    only; gitlab_url itself stays fixed for the lifetime of the tools.
    """

    def client_for(base_url: str, token: Optional[str]) -> GitLabClient:
        return GitLabClient(base_url, token or access_token)

    async def analyze_issue(args: AnalyzeGitLabIssueInput) -> str:
        ref = parse_gitlab_issue_url(gitlab_url, args.issue_url)
        client = client_for(ref.gitlab_url, args.access_token)
        issue_data = await client.get_issue_data(ref.project_id, ref.issue_iid)
        comments = await client.get_issue_comments(ref.project_id, ref.issue_iid)
        qa_analysis = analyze_issue_for_qa(issue_data)
        return format_qa_analysis(issue_data, qa_analysis, comments)

    async def issue_summary(args: GitLabIssueSummaryInput) -> str:
        client = client_for(gitlab_url, args.access_token)
        issue_data = await client.get_issue_data(args.project_id, args.issue_iid)
        qa_analysis = analyze_issue_for_qa(issue_data)
        return format_qa_summary(issue_data, qa_analysis, f"**Proyecto:** {issue_data.project_name}")

    async def commit_by_url(args: GitLabCommitByUrlInput) -> str:
        ref = parse_gitlab_commit_url(gitlab_url, args.commit_url)
        client = client_for(ref.gitlab_url, args.access_token)
        return to_json(await client.get_commit(ref.project_id, ref.sha))

    async def commit(args: GitLabCommitInput) -> str:
        client = client_for(gitlab_url, args.access_token)
        return to_json(await client.get_commit(args.project_id, args.sha))

    async def api_get(args: GitLabApiGetInput) -> str:
        client = client_for(gitlab_url, args.access_token)
        return to_json(await client.aget(args.endpoint, args.params))

    return [
        ToolDefinition(
            name="analyze_gitlab_issue_for_qa",
            description="Analyze a GitLab issue and produce a complete QA report: requirements, acceptance criteria, testing suggestions, risks and test types",
            input_model=AnalyzeGitLabIssueInput,
            handler=analyze_issue,
        ),
        ToolDefinition(
            name="get_gitlab_issue_qa_summary",
            description="Return a short QA summary for a GitLab issue",
            input_model=GitLabIssueSummaryInput,
            handler=issue_summary,
        ),
        ToolDefinition(
            name="gitlab_get_commit_by_url",
            description="Get a GitLab commit from its URL",
            input_model=GitLabCommitByUrlInput,
            handler=commit_by_url,
        ),
        ToolDefinition(
            name="gitlab_get_commit",
            description="Get a GitLab commit by project id and sha",
            input_model=GitLabCommitInput,
            handler=commit,
        ),
        ToolDefinition(
            name="gitlab_api_get",
            description="Perform a GET request against the GitLab API (/projects, /groups, ...)",
            input_model=GitLabApiGetInput,
            handler=api_get,
        ),
    ]
