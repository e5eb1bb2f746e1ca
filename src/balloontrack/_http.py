"""Low-level HTTP transport layer wrapping httpx."""

from __future__ import annotations

from typing import Any

import httpx

from balloontrack.exceptions import (
    BalloonTrackAPIError,
    BalloonTrackConnectionError,
    BalloonTrackTimeoutError,
    BalloonTrackValidationError,
)

DEFAULT_TIMEOUT = 30.0


def _handle_response(response: httpx.Response) -> Any:
    """Validate response status and return parsed JSON."""
    if response.status_code >= 400:
        raise BalloonTrackAPIError(
            status_code=response.status_code,
            message=response.text,
        )
    try:
        return response.json()
    except ValueError as exc:
        raise BalloonTrackValidationError(
            f"Response from {response.request.url} is not valid JSON: {exc}"
        ) from exc


class SyncTransport:
    """Synchronous HTTP transport using httpx.Client."""

    def __init__(self, base_url: str, timeout: float = DEFAULT_TIMEOUT) -> None:
        self._client = httpx.Client(
            base_url=base_url,
            timeout=timeout,
            headers={"Accept": "application/json"},
        )

    def get(self, endpoint: str, params: list[tuple[str, str]] | None = None) -> Any:
        """Perform a GET request and return parsed JSON."""
        try:
            response = self._client.get(endpoint, params=params)
        except httpx.ConnectError as exc:
            raise BalloonTrackConnectionError(str(exc)) from exc
        except httpx.TimeoutException as exc:
            raise BalloonTrackTimeoutError(str(exc)) from exc
        return _handle_response(response)

    def post_json(self, endpoint: str, payload: dict[str, Any]) -> Any:
        """POST a JSON body and return parsed JSON."""
        try:
            response = self._client.post(endpoint, json=payload)
        except httpx.ConnectError as exc:
            raise BalloonTrackConnectionError(str(exc)) from exc
        except httpx.TimeoutException as exc:
            raise BalloonTrackTimeoutError(str(exc)) from exc
        return _handle_response(response)

    def close(self) -> None:
        self._client.close()


class AsyncTransport:
    """Asynchronous HTTP transport using httpx.AsyncClient."""

    def __init__(self, base_url: str, timeout: float = DEFAULT_TIMEOUT) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={"Accept": "application/json"},
        )

    async def get(self, endpoint: str, params: list[tuple[str, str]] | None = None) -> Any:
        """Perform an async GET request and return parsed JSON."""
        try:
            response = await self._client.get(endpoint, params=params)
        except httpx.ConnectError as exc:
            raise BalloonTrackConnectionError(str(exc)) from exc
        except httpx.TimeoutException as exc:
            raise BalloonTrackTimeoutError(str(exc)) from exc
        return _handle_response(response)

    async def post_json(self, endpoint: str, payload: dict[str, Any]) -> Any:
        """POST a JSON body asynchronously and return parsed JSON."""
        try:
            response = await self._client.post(endpoint, json=payload)
        except httpx.ConnectError as exc:
            raise BalloonTrackConnectionError(str(exc)) from exc
        except httpx.TimeoutException as exc:
            raise BalloonTrackTimeoutError(str(exc)) from exc
        return _handle_response(response)

    async def close(self) -> None:
        await self._client.aclose()
