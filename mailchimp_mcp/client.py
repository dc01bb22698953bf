"""
Mailchimp Marketing API v3 client.

One HTTP request per `execute()` call. Success yields the parsed JSON body,
everything else is normalized into the errors defined in `base`.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from .base import ConfigurationError, RemoteAPIError, TransportError
from .config import DEFAULT_DATA_CENTER, get_settings

logger = logging.getLogger(__name__)

API_HOST = "api.mailchimp.com"
API_VERSION = "3.0"


def resolve_data_center(api_key: str) -> str:
    """The data center is the part of the key after its last '-'."""
    if "-" not in api_key:
        return DEFAULT_DATA_CENTER
    return api_key.rsplit("-", 1)[1] or DEFAULT_DATA_CENTER


def resolve_base_url(api_key: str) -> str:
    return f"https://{resolve_data_center(api_key)}.{API_HOST}/{API_VERSION}"


def _error_detail(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return "Unknown error"
    if isinstance(data, dict):
        return data.get("detail") or data.get("title") or "Unknown error"
    return "Unknown error"


class MailchimpClient:
    """Thin async wrapper around the Mailchimp REST API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if api_key is None:
            api_key = get_settings().api_key
        self.api_key = api_key
        self.base_url = resolve_base_url(api_key)
        self._transport = transport

    def _headers(self, with_body: bool) -> Dict[str, str]:
        headers = {"Authorization": f"Bearer {self.api_key}"}
        if with_body:
            headers["Content-Type"] = "application/json"
        return headers

    async def execute(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        body: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Perform one request and return the parsed JSON result."""
        if not self.api_key:
            raise ConfigurationError(
                "MAILCHIMP_API_KEY environment variable is not set. "
                "Format: <key>-<dc> (e.g., abc123-us14)"
            )

        url = f"{self.base_url}{path}"
        query = {k: str(v) for k, v in params.items()} if params else None

        logger.debug(f"{method} {path} params={query}")
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.request(
                    method,
                    url,
                    params=query,
                    json=body,
                    headers=self._headers(body is not None),
                )
        except httpx.TimeoutException as e:
            raise TransportError(f"Mailchimp request timed out: {method} {path}") from e
        except httpx.RequestError as e:
            raise TransportError(f"Mailchimp request failed: {e}") from e

        logger.debug(f"{method} {path} -> {response.status_code}")

        # send, schedule, test and delete answer 204 with no body
        if response.status_code == 204:
            return {}

        if not response.is_success:
            raise RemoteAPIError(response.status_code, _error_detail(response))

        try:
            data = response.json()
        except ValueError as e:
            raise TransportError(
                f"Mailchimp returned an unreadable response ({response.status_code})"
            ) from e

        if not isinstance(data, dict):
            raise TransportError(
                f"Mailchimp returned a {type(data).__name__} where a JSON object was expected"
            )
        return data
