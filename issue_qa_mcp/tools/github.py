"""
GitHub tools: QA analysis, QA summary, commit lookup and raw API access
"""
from typing import Any, Dict, List, Optional

from pydantic import Field

from issue_qa_mcp.errors import invalid_params
from issue_qa_mcp.github_client import GitHubClient, parse_github_commit_url, parse_github_issue_url
from issue_qa_mcp.qa_analyzer import analyze_issue_for_qa
from issue_qa_mcp.report_formatter import format_qa_analysis, format_qa_summary
from issue_qa_mcp.tool_registry import ToolDefinition, ToolInput, to_json

MISSING_TOKEN_MESSAGE = (
    "Se requiere un token de acceso de GitHub. Proporciona 'accessToken' en los argumentos "
    "o configura GITHUB_ACCESS_TOKEN en las variables de entorno."
)

ACCESS_TOKEN_DESCRIPTION = "GitHub access token (optional if GITHUB_ACCESS_TOKEN is set)"


class AnalyzeGitHubIssueInput(ToolInput):
    issue_url: str = Field(alias="issueUrl", description="GitHub issue URL, e.g. https://github.com/owner/repo/issues/123")
    access_token: Optional[str] = Field(None, alias="accessToken", description=ACCESS_TOKEN_DESCRIPTION)


class GitHubIssueSummaryInput(ToolInput):
    owner: str = Field(description="Repository owner (user or organization)")
    repo: str = Field(description="Repository name")
    issue_number: int = Field(alias="issueNumber", description="Issue number")
    access_token: Optional[str] = Field(None, alias="accessToken", description=ACCESS_TOKEN_DESCRIPTION)


class GitHubCommitByUrlInput(ToolInput):
    commit_url: str = Field(alias="commitUrl", description="GitHub commit URL, e.g. https://github.com/owner/repo/commit/<sha>")
    access_token: Optional[str] = Field(None, alias="accessToken", description=ACCESS_TOKEN_DESCRIPTION)


class GitHubCommitInput(ToolInput):
    owner: str = Field(description="Repository owner (user or organization)")
    repo: str = Field(description="Repository name")
    sha: str = Field(description="Commit SHA")
    access_token: Optional[str] = Field(None, alias="accessToken", description=ACCESS_TOKEN_DESCRIPTION)


class GitHubApiGetInput(ToolInput):
    endpoint: str = Field(description="Path under the GitHub API, e.g. /repos/owner/repo/pulls")
    params: Optional[Dict[str, Any]] = Field(None, description="Query parameters")
    access_token: Optional[str] = Field(None, alias="accessToken", description=ACCESS_TOKEN_DESCRIPTION)


def create_github_tools(default_access_token: str = "") -> List[ToolDefinition]:
    """Build the GitHub tool set. A per-call accessToken overrides the default token."""

    def client_for(access_token: Optional[str]) -> GitHubClient:
        token = access_token or default_access_token
        if not token:
            raise invalid_params(MISSING_TOKEN_MESSAGE)
        return GitHubClient(token)

    async def analyze_issue(args: AnalyzeGitHubIssueInput) -> str:
        client = client_for(args.access_token)
        ref = parse_github_issue_url(args.issue_url)
        issue_data = await client.get_issue_data(ref.owner, ref.repo, ref.issue_number)
        qa_analysis = analyze_issue_for_qa(issue_data)
        comments = await client.get_issue_comments(ref.owner, ref.repo, ref.issue_number)
        return format_qa_analysis(issue_data, qa_analysis, comments)

    async def issue_summary(args: GitHubIssueSummaryInput) -> str:
        client = client_for(args.access_token)
        issue_data = await client.get_issue_data(args.owner, args.repo, args.issue_number)
        qa_analysis = analyze_issue_for_qa(issue_data)
        return format_qa_summary(issue_data, qa_analysis, f"**Repositorio:** {args.owner}/{args.repo}")

    async def commit_by_url(args: GitHubCommitByUrlInput) -> str:
        client = client_for(args.access_token)
        ref = parse_github_commit_url(args.commit_url)
        return to_json(await client.get_commit(ref.owner, ref.repo, ref.sha))

    async def commit(args: GitHubCommitInput) -> str:
        client = client_for(args.access_token)
        return to_json(await client.get_commit(args.owner, args.repo, args.sha))

    async def api_get(args: GitHubApiGetInput) -> str:
        client = client_for(args.access_token)
        return to_json(await client.aget(args.endpoint, args.params))

    return [
        ToolDefinition(
            name="analyze_github_issue_for_qa",
            description="Analyze a GitHub issue and produce a complete QA report: requirements, acceptance criteria, testing suggestions, risks and test types",
            input_model=AnalyzeGitHubIssueInput,
            handler=analyze_issue,
        ),
        ToolDefinition(
            name="get_github_issue_qa_summary",
            description="Return a short QA summary for a GitHub issue",
            input_model=GitHubIssueSummaryInput,
            handler=issue_summary,
        ),
        ToolDefinition(
            name="github_get_commit_by_url",
            description="Get a GitHub commit from its URL",
            input_model=GitHubCommitByUrlInput,
            handler=commit_by_url,
        ),
        ToolDefinition(
            name="github_get_commit",
            description="Get a GitHub commit by owner, repo and sha",
            input_model=GitHubCommitInput,
            handler=commit,
        ),
        ToolDefinition(
            name="github_api_get",
            description="Perform a GET request against the GitHub API (/repos, /orgs, ...)",
            input_model=GitHubApiGetInput,
            handler=api_get,
        ),
    ]
