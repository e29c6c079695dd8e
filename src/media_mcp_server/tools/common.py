"""Shared helpers for provider tools."""

from __future__ import annotations

import base64
import binascii
from typing import Any
from urllib.parse import quote

ASPECT_RATIOS = ["1:1", "3:4", "4:3", "9:16", "16:9", "9:21", "21:9"]
LUMA_IMAGE_MODELS = ["photon-1", "photon-flash-1"]
LUMA_VIDEO_MODELS = ["ray-1-6", "ray-2", "ray-flash-2"]
LUMA_RESOLUTIONS = ["540p", "720p", "1080p", "4k"]
OPENAI_FILE_PURPOSES = ["assistants", "fine-tune", "batch"]
GENERATION_ID_PATTERN = (
    "^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$"
)


def string_param(description: str, **keywords: Any) -> dict[str, Any]:
    return {"type": "string", "description": description, **keywords}


def object_params(
    properties: dict[str, Any], required: list[str] | None = None
) -> dict[str, Any]:
    return {"type": "object", "properties": properties, "required": required or []}


def reference_images_param(
    description: str, weight: float, **keywords: Any
) -> dict[str, Any]:
    """Schema for a list of ``{url, weight}`` reference images."""
    return {
        "type": "array",
        "description": description,
        "items": {
            "type": "object",
            "properties": {
                "url": string_param("URL of the reference image.", format="uri"),
                "weight": {
                    "type": "number",
                    "description": "Influence of this reference image (0.0-1.0).",
                    "minimum": 0.0,
                    "maximum": 1.0,
                    "default": weight,
                },
            },
            "required": ["url"],
        },
        "minItems": 1,
        **keywords,
    }


def decode_png(encoded: str, field: str) -> tuple[str, bytes, str]:
    """Decode a base64 PNG argument into a multipart file part."""
    try:
        content = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"'{field}' is not valid base64") from e
    return (f"{field}.png", content, "image/png")


def form_fields(arguments: dict[str, Any], names: list[str]) -> dict[str, str]:
    """Pick present arguments and render them as multipart form values."""
    return {
        name: str(arguments[name])
        for name in names
        if arguments.get(name) is not None
    }


def path_segment(value: str) -> str:
    """Percent-encode an identifier for use as one URL path segment."""
    return quote(value, safe="")

def video_duration(seconds: float) -> str:
    """Render a duration the way Luma expects it, e.g. ``"5s"``."""
    return f"{seconds:g}s"
