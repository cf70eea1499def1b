"""
Issue QA MCP Server
Analyzes GitHub/GitLab issues for QA and exposes HTTP, database and web search tools
"""

__version__ = "1.1.0"
