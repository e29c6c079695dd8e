"""HTTP client shared by the provider tool wrappers."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

import httpx

from media_mcp.errors import MCPError
from media_mcp_server.config import Settings, logger


class ProviderError(MCPError):
    """Error reported by, or before reaching, a provider API."""

    def __init__(
        self, provider: str, message: str, status_code: int | None = None
    ) -> None:
        super().__init__(
            "ProviderError",
            message,
            {"provider": provider, "status_code": status_code},
        )
        self.provider = provider
        self.status_code = status_code


class ProviderClient:
    """Bearer-authenticated JSON/multipart client for one provider.

    A fresh ``httpx.AsyncClient`` is opened per request, so the client holds no
    connection state and can be shared by concurrent calls.
    """

    def __init__(
        self,
        name: str,
        base_url: str,
        api_key: str | None,
        *,
        credential_env: str,
        timeout: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.name = name
        self.base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._credential_env = credential_env
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def openai(
        cls, settings: Settings, transport: httpx.AsyncBaseTransport | None = None
    ) -> ProviderClient:
        return cls(
            "openai",
            settings.openai_base_url,
            settings.openai_api_key,
            credential_env="OPENAI_API_KEY",
            timeout=settings.http_timeout,
            transport=transport,
        )

    @classmethod
    def luma(
        cls, settings: Settings, transport: httpx.AsyncBaseTransport | None = None
    ) -> ProviderClient:
        return cls(
            "luma",
            settings.luma_base_url,
            settings.luma_api_key,
            credential_env="LUMA_API_KEY",
            timeout=settings.http_timeout,
            transport=transport,
        )

    def _headers(self) -> dict[str, str]:
        if not self._api_key:
            raise ProviderError(self.name, f"{self._credential_env} is not set")
        return {"Authorization": f"Bearer {self._api_key}"}

    async def request(
        self,
        method: str,
        path: str,
        *,
        json_body: Any = None,
        params: Mapping[str, Any] | None = None,
        data: Mapping[str, Any] | None = None,
        files: Mapping[str, Any] | None = None,
        as_text: bool = False,
    ) -> Any:
        """Send a request and decode the response.

        Args:
            method: HTTP method.
            path: Path relative to the provider base URL.
            json_body: JSON request body.
            params: Query parameters; ``None`` values are dropped.
            data: Multipart form fields.
            files: Multipart file parts.
            as_text: Return the body as text instead of decoding JSON.

        Raises:
            ProviderError: If the credential is missing, the provider answers with
                an error status or the body is not valid JSON.
            httpx.HTTPError: On transport failures and timeouts.

        Returns:
            Decoded JSON (``None`` for an empty body) or the body text.
        """
        headers = self._headers()
        query = {
            key: value for key, value in (params or {}).items() if value is not None
        }
        logger.debug("%s %s%s", method, self.base_url, path)
        async with httpx.AsyncClient(
            base_url=self.base_url, timeout=self._timeout, transport=self._transport
        ) as client:
            response = await client.request(
                method,
                path,
                headers=headers,
                json=json_body,
                params=query or None,
                data=data,
                files=files,
            )

        if response.is_error:
            raise ProviderError(
                self.name, _error_message(response), response.status_code
            )
        if as_text:
            return response.text
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ProviderError(
                self.name,
                f"{self.name} returned a malformed JSON body",
                response.status_code,
            ) from e

    async def get(self, path: str, **kwargs: Any) -> Any:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> Any:
        return await self.request("POST", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Any:
        return await self.request("DELETE", path, **kwargs)


def _error_message(response: httpx.Response) -> str:
    """Prefer the JSON error body, fall back to the status line."""
    try:
        return json.dumps(response.json())
    except ValueError:
        return f"HTTP {response.status_code}: {response.reason_phrase}"
