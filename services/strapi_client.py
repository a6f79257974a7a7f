"""
Strapi REST client.

Thin async wrapper over httpx for the two calls the importer makes:
filtered list lookups and entry creation. One client (one connection
pool) per run; requests are never retried.
"""

from typing import Any, Optional
import structlog

import httpx
from pydantic import ValidationError as PydanticValidationError

from exceptions import (
    StrapiRequestError,
    StrapiResponseError,
    StrapiTransportError,
)
from models.strapi import StrapiEntry, StrapiListResponse

logger = structlog.get_logger(__name__)


class StrapiClient:
    """
    Async HTTP client for Strapi content-type endpoints.

    Usage:
        async with StrapiClient(settings.strapi_url, settings.strapi_token) as client:
            authors = await client.find("authors", {"slug": "jane-doe"})
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            base_url: Strapi base URL, e.g. "http://localhost:1337"
            token: API token; requests go out unauthenticated when None
            transport: Custom httpx transport (tests pass a MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self.token = token.strip() if token and token.strip() else None

        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            transport=transport,
        )

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    async def find(
        self,
        content_type: str,
        filters: Optional[dict[str, str]] = None,
    ) -> list[StrapiEntry]:
        """
        GET /api/{content_type}?filters[field]=value

        Returns:
            Entries in the order the backend returned them

        Raises:
            StrapiTransportError: No HTTP answer
            StrapiRequestError: Non-2xx answer
            StrapiResponseError: Body is not a list envelope
        """
        path = f"/api/{content_type}"
        params = {f"filters[{k}]": v for k, v in (filters or {}).items()}

        response = await self._send("GET", path, params=params)

        try:
            envelope = StrapiListResponse.model_validate(response.json())
        except (ValueError, PydanticValidationError) as e:
            raise StrapiResponseError(path, str(e)) from e

        logger.debug(
            "strapi_find",
            content_type=content_type,
            filters=filters,
            matches=len(envelope.data)
        )
        return envelope.data

    async def create(self, content_type: str, data: dict[str, Any]) -> dict:
        """
        POST /api/{content_type} with body {"data": data}.

        No existence check is made first; posting the same row twice
        creates two entries.

        Returns:
            Decoded response body ({} when the body is not JSON)

        Raises:
            StrapiTransportError: No HTTP answer
            StrapiRequestError: Non-2xx answer (validation, auth, conflict)
        """
        path = f"/api/{content_type}"
        response = await self._send("POST", path, json={"data": data})

        try:
            return response.json()
        except ValueError:
            return {}

    async def _send(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            response = await self.client.request(method, path, **kwargs)
        except httpx.TransportError as e:
            raise StrapiTransportError(method, path, f"{type(e).__name__}: {e}") from e

        if not response.is_success:
            raise StrapiRequestError(
                method=method,
                path=path,
                status_code=response.status_code,
                response_body=_response_body(response),
            )

        return response

    async def close(self):
        await self.client.aclose()

    async def __aenter__(self) -> "StrapiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


def _response_body(response: httpx.Response) -> Any:
    """Error body as JSON when possible, else the first 500 chars of text."""
    try:
        return response.json()
    except ValueError:
        return response.text[:500] if response.text else None
