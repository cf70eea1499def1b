"""
Web search tool backed by the DuckDuckGo Instant Answer API
"""
import asyncio
import logging
from typing import Any, Dict, List, Optional

import requests
from pydantic import Field

from issue_qa_mcp.errors import internal_error
from issue_qa_mcp.settings import Settings
from issue_qa_mcp.tool_registry import ToolDefinition, ToolInput, to_json

logger = logging.getLogger(__name__)

DEFAULT_MAX_RESULTS = 5


class WebSearchInput(ToolInput):
    query: str = Field(description="Search terms")
    max_results: Optional[int] = Field(None, alias="maxResults", description="Maximum number of results (default 5)")


def extract_results(data: Dict[str, Any]) -> List[Dict[str, str]]:
    """Collect {title, url, snippet} items from the abstract and related topics"""
    items = []
    if data.get("Abstract") and data.get("AbstractURL"):
        items.append({
            "title": data.get("Heading") or "",
            "url": data["AbstractURL"],
            "snippet": data.get("Abstract") or "",
        })

    related = data.get("RelatedTopics")
    if isinstance(related, list):
        for entry in related:
            # Grouped topics carry their entries under "Topics"
            topic = entry if entry.get("Text") else (entry.get("Topics") or [None])[0]
            if topic and topic.get("FirstURL"):
                items.append({
                    "title": topic.get("Text") or "",
                    "url": topic["FirstURL"],
                    "snippet": topic.get("Text") or "",
                })
    return items


def search(query: str, max_results: Optional[int] = None) -> List[Dict[str, str]]:
    limit = max_results if max_results and max_results > 0 else DEFAULT_MAX_RESULTS
    logger.info(f"🔎 Web search: {query!r} (max {limit})")
    try:
        response = requests.get(
            Settings.WEB_SEARCH_URL,
            params={"q": query, "format": "json", "no_html": 1, "no_redirect": 1},
        )
        response.raise_for_status()
        data = response.json() or {}
    except (requests.RequestException, ValueError) as e:
        raise internal_error(str(e))
    return extract_results(data)[:limit]


def create_web_tools() -> List[ToolDefinition]:

    async def web_search(args: WebSearchInput) -> str:
        return to_json(await asyncio.to_thread(search, args.query, args.max_results))

    return [
        ToolDefinition(
            name="web_search",
            description="Search the web and return basic results (title, url, snippet)",
            input_model=WebSearchInput,
            handler=web_search,
        ),
    ]
