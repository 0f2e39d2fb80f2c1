"""
Async HTTP client for the Guest Book API.

Usage::

    async with GuestBookClient.from_env() as client:
        await client.create_comment("Alice", "Hello!")
        entries = await client.get_comments()

The API location must be configured explicitly: ``from_env`` raises
``ConfigurationError`` when ``GUESTBOOK_API_URL`` is unset instead of
guessing a default.
"""
import logging
import os

import httpx

from app.errors import ConfigurationError

logger = logging.getLogger(__name__)

API_URL_ENV = "GUESTBOOK_API_URL"


class ApiError(Exception):
    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class GuestBookClient:
    def __init__(
        self,
        base_url: str,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 10.0,
    ) -> None:
        if not base_url:
            raise ConfigurationError("Guest Book API URL is not configured")
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            transport=transport,
            timeout=timeout,
            headers={"Content-Type": "application/json", "Cache-Control": "no-store"},
        )

    @classmethod
    def from_env(cls, **kwargs) -> "GuestBookClient":
        base_url = os.environ.get(API_URL_ENV)
        if not base_url:
            raise ConfigurationError(f"{API_URL_ENV} is not set")
        return cls(base_url, **kwargs)

    async def __aenter__(self) -> "GuestBookClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    @staticmethod
    def _raise_for_status(resp: httpx.Response, fallback: str) -> None:
        if resp.is_success:
            return
        try:
            message = resp.json().get("message") or fallback
        except (ValueError, AttributeError):
            message = resp.reason_phrase or fallback
        logger.warning("Guest Book API error %s: %s", resp.status_code, message)
        raise ApiError(resp.status_code, message)

    async def get_comments(self) -> list[dict]:
        resp = await self._client.get("/comments")
        self._raise_for_status(resp, "Failed to fetch comments")
        return resp.json()

    async def create_comment(self, name: str, message: str) -> dict:
        resp = await self._client.post("/comments", json={"name": name, "message": message})
        self._raise_for_status(resp, "Failed to create comment")
        return resp.json()
