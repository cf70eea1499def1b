"""
Minimal authenticated REST client shared by the GitHub and GitLab clients
"""
import asyncio
import logging
from typing import Any, Dict, Optional

import requests

from issue_qa_mcp.errors import api_error, internal_error

logger = logging.getLogger(__name__)


class RestApiClient:
    """Issues authenticated GET requests against a provider REST API"""

    provider_name = "REST"

    def __init__(self, api_base_url: str, access_token: str):
        self.api_base_url = api_base_url.rstrip("/")
        self.access_token = access_token

    def _headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.access_token}"}

    def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """GET {api_base_url}{endpoint} and return the decoded JSON body"""
        url = f"{self.api_base_url}{endpoint}"
        logger.debug(f"[{self.provider_name}] GET {url} params={params}")
        try:
            response = requests.get(url, headers=self._headers(), params=params)
            response.raise_for_status()
            return response.json()
        except requests.JSONDecodeError as e:
            raise internal_error(f"Error de {self.provider_name} API: respuesta JSON inválida ({e})")
        except requests.RequestException as e:
            raise api_error(self.provider_name, e)

    async def aget(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Non-blocking variant of get for use inside tool handlers"""
        return await asyncio.to_thread(self.get, endpoint, params)
