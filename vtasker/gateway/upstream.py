"""
Upstream backend client for the proxy routes.

Wraps an httpx.AsyncClient bound to the backend API prefix, plus helpers
that turn upstream failures into {"error": message} responses.

Dependencies: httpx, fastapi, vtasker.configs
System role: Backend HTTP access for the gateway
"""

import logging
from typing import Any

import httpx
from fastapi import Request
from fastapi.responses import JSONResponse

from vtasker.configs.gateway import GatewaySettings
from vtasker.observability.correlation import CORRELATION_HEADER, get_correlation_id

logger = logging.getLogger(__name__)

_MESSAGE_KEYS = ("message", "error", "detail")


class UpstreamClient:
    """
    Async client for the backend API.

    Attributes:
        base_url: Backend URL including the API prefix
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: GatewaySettings) -> "UpstreamClient":
        return cls(settings.upstream_base, timeout=settings.timeout_seconds)

    async def request(
        self,
        method: str,
        path: str,
        *,
        authorization: str | None = None,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> httpx.Response:
        """
        Send one request upstream.

        Args:
            method: HTTP method
            path: Path below the API prefix, e.g. "/projects"
            authorization: Authorization header value to forward
            params: Query parameters
            json: JSON body

        Returns:
            httpx.Response: Raw upstream response

        Raises:
            httpx.HTTPError: Transport failure
        """
        headers = {"Content-Type": "application/json"}
        if authorization:
            headers["Authorization"] = authorization
        correlation_id = get_correlation_id()
        if correlation_id:
            headers[CORRELATION_HEADER] = correlation_id

        response = await self._client.request(
            method,
            path,
            headers=headers,
            params=params,
            json=json,
        )
        logger.info(
            f"Upstream {method} {path} - {response.status_code}",
            extra={"upstream_path": path, "status_code": response.status_code},
        )
        return response

    async def aclose(self) -> None:
        await self._client.aclose()


def get_upstream(request: Request) -> UpstreamClient:
    """FastAPI dependency returning the app's upstream client."""
    return request.app.state.upstream


def is_json(response: httpx.Response) -> bool:
    return "application/json" in response.headers.get("content-type", "")


def extract_error_message(response: httpx.Response, default: str) -> str:
    """
    Best human-readable message from an upstream error response.

    Looks at message, error and detail in a JSON body, then at the raw
    text, then falls back to default.
    """
    if is_json(response):
        try:
            body = response.json()
        except ValueError:
            return default
        if isinstance(body, dict):
            for key in _MESSAGE_KEYS:
                value = body.get(key)
                if isinstance(value, str) and value:
                    return value
                if isinstance(value, dict) and isinstance(value.get("message"), str):
                    return value["message"]
        return default
    return response.text or default


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def passthrough(response: httpx.Response, status_code: int | None = None) -> JSONResponse:
    """Relay an upstream JSON body with the upstream (or given) status."""
    return JSONResponse(status_code=status_code or response.status_code, content=response.json())
