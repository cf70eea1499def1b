"""
Environment-backed configuration for the Issue QA MCP server
"""
import os
from typing import List

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Process-wide configuration read from environment variables"""

    GITLAB_URL = "https://gitlab.com"
    GITLAB_ACCESS_TOKEN = ""
    GITHUB_ACCESS_TOKEN = ""
    GITHUB_API_URL = "https://api.github.com"
    HTTP_TIMEOUT_MS = 15000
    REJECTED_HTTP_TIMEOUT = None
    WEB_SEARCH_URL = "https://api.duckduckgo.com/"
    LOG_LEVEL = "INFO"
    SERVER_NAME = "issue-qa-mcp-server"
    SERVER_VERSION = "1.1.0"

    @classmethod
    def reload_config(cls):
        """Re-read every setting from the environment"""
        cls.GITLAB_URL = os.getenv("GITLAB_URL", "https://gitlab.com").rstrip("/")
        cls.GITLAB_ACCESS_TOKEN = os.getenv("GITLAB_ACCESS_TOKEN", "")
        cls.GITHUB_ACCESS_TOKEN = os.getenv("GITHUB_ACCESS_TOKEN", "")
        cls.GITHUB_API_URL = os.getenv("GITHUB_API_URL", "https://api.github.com").rstrip("/")
        cls.WEB_SEARCH_URL = os.getenv("WEB_SEARCH_URL", "https://api.duckduckgo.com/")
        cls.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        cls.SERVER_NAME = os.getenv("MCP_SERVER_NAME", "issue-qa-mcp-server")

        raw_timeout = os.getenv("HTTP_TIMEOUT_MS", "15000")
        cls.REJECTED_HTTP_TIMEOUT = None
        try:
            cls.HTTP_TIMEOUT_MS = int(raw_timeout)
        except ValueError:
            cls.HTTP_TIMEOUT_MS = 0
        if cls.HTTP_TIMEOUT_MS <= 0:
            cls.REJECTED_HTTP_TIMEOUT = raw_timeout
            cls.HTTP_TIMEOUT_MS = 15000

    @classmethod
    def validate(cls) -> List[str]:
        """Return configuration warnings. Missing tokens only disable features."""
        warnings = []
        if not cls.GITLAB_ACCESS_TOKEN:
            warnings.append(
                "GITLAB_ACCESS_TOKEN is not set. GitLab tools will not be available."
            )
        if not cls.GITHUB_ACCESS_TOKEN:
            warnings.append(
                "GITHUB_ACCESS_TOKEN is not set. GitHub tools require an 'accessToken' argument."
            )
        if cls.REJECTED_HTTP_TIMEOUT is not None:
            warnings.append(
                f"HTTP_TIMEOUT_MS={cls.REJECTED_HTTP_TIMEOUT!r} is not a positive integer, using 15000"
            )
        return warnings


Settings.reload_config()
