"""
tfexplorer/clients/base.py

Shared aiohttp plumbing for the Atlas and Terraform Enterprise clients:
session lifecycle, auth headers, a total request timeout, and mapping of
transport/status failures to NetworkError and bad bodies to DecodeError.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Dict, Mapping, Optional, Type, TypeVar

import aiohttp

from tfexplorer.errors import DecodeError, NetworkError
from tfexplorer.models.settings import ExplorerSettings

logger = logging.getLogger(__name__)

C = TypeVar("C", bound="AsyncAPIClient")


class AsyncAPIClient:
    """Base class for a read-only JSON HTTP client.

    Subclasses supply auth headers through `_auth_headers()`.
    """

    def __init__(self, settings: ExplorerSettings) -> None:
        """
        Initialize the client.

        Args:
            settings (ExplorerSettings): Token, base address, timeout and SSL flag.
        """
        self._addr = settings.addr.rstrip("/")
        self._token = settings.token.get_secret_value()
        self._verify_ssl = settings.verify_ssl
        self._timeout = aiohttp.ClientTimeout(total=settings.request_timeout_seconds)
        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self: C) -> C:
        """Async context manager entry, creates an aiohttp session."""
        self._session = aiohttp.ClientSession(timeout=self._timeout)
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[Any],
    ) -> None:
        """Async context manager exit, closes the aiohttp session."""
        await self.close()

    async def close(self) -> None:
        if self._session:
            await self._session.close()
        self._session = None

    async def ensure_session(self) -> aiohttp.ClientSession:
        """Ensure an aiohttp session is available, creating one if needed.

        Returns:
            aiohttp.ClientSession: The active session.
        """
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
        return self._session

    def _auth_headers(self) -> Dict[str, str]:
        return {}

    def _url(self, path: str) -> str:
        return f"{self._addr}{path}"

    async def get_bytes(
        self,
        url: str,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> bytes:
        """GET a URL and return the raw body.

        Args:
            url: Absolute URL.
            params: Query parameters.
            headers: Extra headers; auth headers are always added.

        Raises:
            NetworkError: On transport failure, timeout, or a non-2xx status.
        """
        session = await self.ensure_session()
        all_headers = {**self._auth_headers(), **(headers or {})}
        logger.debug("GET %s params=%s", url, params)
        try:
            async with session.get(
                url, params=params, headers=all_headers, ssl=self._verify_ssl
            ) as resp:
                body = await resp.read()
                if resp.status < 200 or resp.status >= 300:
                    raise NetworkError(
                        f"GET {url} failed: {resp.status} {resp.reason}",
                        status=resp.status,
                    )
                return body
        except aiohttp.ClientError as exc:
            raise NetworkError(f"GET {url} failed: {exc}") from exc
        except asyncio.TimeoutError as exc:
            raise NetworkError(f"GET {url} timed out") from exc

    async def get_json(
        self,
        url: str,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        """GET a URL and decode the body as JSON, whatever its content type.

        Raises:
            NetworkError: As for get_bytes.
            DecodeError: If the body is not valid JSON.
        """
        body = await self.get_bytes(url, params=params, headers=headers)
        try:
            return json.loads(body)
        except ValueError as exc:
            raise DecodeError(f"GET {url} returned invalid JSON: {exc}") from exc
