"""Shared test helpers for mocking HTTP responses."""

from typing import Any, Dict
from unittest.mock import Mock

import requests


def json_response(payload: Any, status_code: int = 200, reason: str = "OK") -> Mock:
    """Mock of a requests.Response carrying a JSON body."""
    response = Mock()
    response.status_code = status_code
    response.reason = reason
    response.headers = {"Content-Type": "application/json"}
    response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(
            f"{status_code} {reason}", response=response
        )
    else:
        response.raise_for_status.return_value = None
    return response


def route_get(routes: Dict[str, Any]):
    """side_effect for requests.get answering by URL suffix."""

    def _get(url, headers=None, params=None, **kwargs):
        for suffix, payload in routes.items():
            if url.endswith(suffix):
                return json_response(payload)
        raise AssertionError(f"Unexpected URL requested: {url}")

    return _get
