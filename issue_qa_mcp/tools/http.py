"""
Generic HTTP request tool
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


class HttpRequestInput(ToolInput):
    method: str = Field(description="HTTP method")
    url: str = Field(description="Request URL")
    headers: Optional[Dict[str, Any]] = Field(None, description="Request headers; values are sent as strings")
    params: Optional[Dict[str, Any]] = Field(None, description="Query parameters")
    body: Optional[str] = Field(None, description="Request body (JSON string or plain text)")
    timeout_ms: Optional[int] = Field(None, alias="timeoutMs", description="Timeout in milliseconds (default 15000)")


def _response_payload(response: requests.Response) -> Dict[str, Any]:
    try:
        data = response.json()
    except ValueError:
        data = response.text
    return {
        "status": response.status_code,
        "statusText": response.reason,
        "headers": dict(response.headers),
        "data": data,
    }


def perform_request(args: HttpRequestInput) -> Dict[str, Any]:
    """Send the request and describe the response. Non-2xx statuses are returned, not raised."""
    timeout_ms = args.timeout_ms or Settings.HTTP_TIMEOUT_MS
    logger.info(f"🌐 {args.method.upper()} {args.url}")
    try:
        response = requests.request(
            args.method.upper(),
            args.url,
            headers={name: str(value) for name, value in (args.headers or {}).items()},
            params=args.params or None,
            data=args.body.encode("utf-8") if args.body else None,
            timeout=timeout_ms / 1000,
        )
    except requests.RequestException as e:
        raise internal_error(str(e))
    return _response_payload(response)


def create_http_tools() -> List[ToolDefinition]:

    async def http_request(args: HttpRequestInput) -> str:
        return to_json(await asyncio.to_thread(perform_request, args))

    return [
        ToolDefinition(
            name="http_request",
            description="Perform a generic HTTP request",
            input_model=HttpRequestInput,
            handler=http_request,
        ),
    ]
