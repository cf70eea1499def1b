"""
Tool factories grouped by provider
"""
from issue_qa_mcp.tools.db import create_db_tools
from issue_qa_mcp.tools.github import create_github_tools
from issue_qa_mcp.tools.gitlab import create_gitlab_tools
from issue_qa_mcp.tools.http import create_http_tools
from issue_qa_mcp.tools.web import create_web_tools

__all__ = [
    "create_db_tools",
    "create_github_tools",
    "create_gitlab_tools",
    "create_http_tools",
    "create_web_tools",
]
