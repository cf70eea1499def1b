"""
Protocol error helpers

Every failure surfaced to a caller is an McpError carrying one of three codes:
invalid parameters, method not found, or internal error.
"""
from mcp.shared.exceptions import McpError
from mcp.types import ErrorData, INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND
import requests


def invalid_params(message: str) -> McpError:
    return McpError(ErrorData(code=INVALID_PARAMS, message=message))


def method_not_found(message: str) -> McpError:
    return McpError(ErrorData(code=METHOD_NOT_FOUND, message=message))


def internal_error(message: str) -> McpError:
    return McpError(ErrorData(code=INTERNAL_ERROR, message=message))


def api_error(provider: str, error: requests.RequestException) -> McpError:
    """Wrap a failed provider REST call, keeping the remote status and message when present"""
    response = getattr(error, "response", None)
    if response is not None:
        detail = None
        try:
            body = response.json()
            if isinstance(body, dict):
                detail = body.get("message") or body.get("error")
        except ValueError:
            pass
        if not isinstance(detail, str) or not detail:
            detail = str(detail) if detail else response.reason
        return internal_error(f"Error de {provider} API: {response.status_code} - {detail}")
    return internal_error(f"Error de conexión: {error}")
