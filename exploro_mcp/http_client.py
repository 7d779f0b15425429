"""HTTP request adapter for the Exploro REST API."""

import json
import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import httpx

from exploro_mcp.config import Settings
from exploro_mcp.errors import ApiError

logger = logging.getLogger(__name__)

QueryValue = Union[bool, int, float, str, Sequence[Union[bool, int, float, str]], None]

METHODS = ("GET", "POST", "PUT", "DELETE")


def _query_str(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_query(query_params: Optional[Mapping[str, QueryValue]]) -> List[Tuple[str, str]]:
    """Flatten query parameters into (key, value) pairs.

    None and "" mean "omit". Lists become one entry per element under the
    same key (tags=a&tags=b), never a comma-joined value.
    """
    pairs: List[Tuple[str, str]] = []
    if not query_params:
        return pairs

    for key, value in query_params.items():
        if value is None or value == "":
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend((key, _query_str(item)) for item in value)
        else:
            pairs.append((key, _query_str(value)))
    return pairs


def _error_message(data: Any) -> Optional[str]:
    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return None


class ApiClient:
    """Issues authenticated JSON requests against the Exploro API.

    No retries and no timeout override; the httpx defaults apply.
    """

    def __init__(self, settings: Settings, client: Optional[httpx.AsyncClient] = None):
        self.base_url = settings.exploro_base_url.rstrip("/")
        self.api_key = settings.exploro_api_key
        self._client = client

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key or ''}",
            "Content-Type": "application/json",
        }

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient()
        return self._client

    async def request(
        self,
        method: str,
        endpoint: str,
        body: Optional[Dict[str, Any]] = None,
        query_params: Optional[Mapping[str, QueryValue]] = None,
    ) -> Any:
        """Send a request and return the parsed JSON body.

        Args:
            method: GET, POST, PUT or DELETE
            endpoint: Path relative to the base URL, e.g. /api/v1/dishes
            body: JSON body, sent for non-GET methods only
            query_params: Query parameters (see build_query)

        Raises:
            ApiError: non-success status, transport failure, or a body
                that is not JSON
        """
        method = method.upper()
        if method not in METHODS:
            raise ValueError(f"Unsupported method: {method}")

        url = f"{self.base_url}{endpoint}"
        content = None
        if body is not None and method != "GET":
            content = json.dumps(body, ensure_ascii=False).encode("utf-8")

        logger.debug(f"{method} {url}")

        try:
            response = await self._get_client().request(
                method,
                url,
                params=build_query(query_params),
                headers=self.headers,
                content=content,
            )
        except httpx.HTTPError as e:
            raise ApiError(f"API request failed: {e}", cause=e) from e

        try:
            data = response.json()
        except ValueError as e:
            if response.is_success:
                raise ApiError(
                    f"API returned invalid JSON: {e}",
                    status_code=response.status_code,
                    cause=e,
                ) from e
            data = None

        if not response.is_success:
            message = _error_message(data) or f"API request failed: {response.reason_phrase}"
            logger.debug(f"{method} {url} -> {response.status_code}: {message}")
            raise ApiError(message, status_code=response.status_code)

        return data

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
