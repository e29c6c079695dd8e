"""Configuration management for the media MCP server.

Settings come from environment variables; ``main`` loads a ``.env`` file first
when one is present. Logging goes to stderr so it never interferes with the stdio
MCP transport.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass

logger = logging.getLogger("media_mcp")

OPENAI_IMAGES = "openai-image-generation"
OPENAI_FILES = "openai-files"
LUMA = "luma-video-generation"
ALL_TOOLSETS: tuple[str, ...] = (OPENAI_IMAGES, OPENAI_FILES, LUMA)

DEFAULT_OPENAI_BASE_URL = "https://api.openai.com"
DEFAULT_LUMA_BASE_URL = "https://api.lumalabs.ai"
DEFAULT_HTTP_TIMEOUT = 120.0


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging on stderr."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


@dataclass(frozen=True)
class Settings:
    """Runtime settings for provider clients and tool selection."""

    openai_api_key: str | None = None
    openai_base_url: str = DEFAULT_OPENAI_BASE_URL
    luma_api_key: str | None = None
    luma_base_url: str = DEFAULT_LUMA_BASE_URL
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    toolsets: tuple[str, ...] = ALL_TOOLSETS
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from environment variables.

        Raises:
            ValueError: If a variable holds an invalid value.
        """
        env = os.environ if environ is None else environ
        return cls(
            openai_api_key=(
                _clean(env.get("OPENAI_API_KEY")) or _clean(env.get("API_KEY"))
            ),
            openai_base_url=(
                _clean(env.get("OPENAI_BASE_URL")) or DEFAULT_OPENAI_BASE_URL
            ),
            luma_api_key=_clean(env.get("LUMA_API_KEY")),
            luma_base_url=_clean(env.get("LUMA_BASE_URL")) or DEFAULT_LUMA_BASE_URL,
            http_timeout=_parse_timeout(env.get("MEDIA_MCP_HTTP_TIMEOUT")),
            toolsets=_parse_toolsets(env.get("MEDIA_MCP_TOOLSETS")),
            log_level=(_clean(env.get("LOG_LEVEL")) or "INFO").upper(),
        )


def _clean(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value.strip()


def _parse_timeout(raw: str | None) -> float:
    value = _clean(raw)
    if value is None:
        return DEFAULT_HTTP_TIMEOUT
    try:
        timeout = float(value)
    except ValueError as e:
        raise ValueError(f"MEDIA_MCP_HTTP_TIMEOUT must be a number, got '{raw}'") from e
    if timeout <= 0:
        raise ValueError(f"MEDIA_MCP_HTTP_TIMEOUT must be positive, got '{raw}'")
    return timeout


def _parse_toolsets(raw: str | None) -> tuple[str, ...]:
    value = _clean(raw)
    if value is None:
        return ALL_TOOLSETS
    toolsets = tuple(part.strip() for part in value.split(",") if part.strip())
    unknown = [name for name in toolsets if name not in ALL_TOOLSETS]
    if unknown:
        raise ValueError(
            f"MEDIA_MCP_TOOLSETS has unknown toolsets {unknown}; "
            f"choose from {list(ALL_TOOLSETS)}"
        )
    return toolsets
