"""OpenAI image generation, edit and variation tools."""

from __future__ import annotations

from typing import Any

from media_mcp.tools import api_tool
from media_mcp_server.providers import ProviderClient
from media_mcp_server.tools.common import (
    decode_png,
    form_fields,
    object_params,
    string_param,
)

_SMALL_SIZES = ["256x256", "512x512", "1024x1024"]
_GPT_IMAGE_OPTIONS = ("background", "moderation", "output_compression", "output_format")
_RESPONSE_FORMAT = string_param(
    "The format of the response.", enum=["url", "b64_json"], default="url"
)
_USER = string_param("A unique identifier representing your end-user.")


def _count(description: str) -> dict[str, Any]:
    return {
        "type": "integer",
        "description": description,
        "minimum": 1,
        "maximum": 10,
        "default": 1,
    }


GENERATE_IMAGE_PARAMETERS = object_params(
    {
        "prompt": string_param(
            "The text description of the desired image (max 1000 chars for "
            "DALL-E 2, 4000 for DALL-E 3, 32000 for gpt-image-1)."
        ),
        "model": string_param(
            "The model to use for image generation.",
            enum=["dall-e-2", "dall-e-3", "gpt-image-1"],
            default="gpt-image-1",
        ),
        "n": _count(
            "Number of images to generate (1-10 for DALL-E 2, 1 for DALL-E 3)."
        ),
        "quality": string_param(
            "The quality of the image.",
            enum=["standard", "hd", "auto"],
            default="auto",
        ),
        "response_format": _RESPONSE_FORMAT,
        "size": string_param(
            "The size of the generated image.",
            enum=[*_SMALL_SIZES, "1792x1024", "1024x1792"],
            default="1024x1024",
        ),
        "style": string_param(
            "The style of the image (DALL-E 3 only).",
            enum=["vivid", "natural"],
            default="vivid",
        ),
        "user": _USER,
        "background": string_param(
            "Background transparency for gpt-image-1.",
            enum=["transparent", "opaque", "auto"],
            default="auto",
        ),
        "moderation": string_param(
            "Content moderation level for gpt-image-1.",
            enum=["low", "auto"],
            default="auto",
        ),
        "output_compression": {
            "type": "integer",
            "description": "Compression level (0-100%) for webp/jpeg output.",
            "minimum": 0,
            "maximum": 100,
            "default": 100,
        },
        "output_format": string_param(
            "Output format for gpt-image-1.",
            enum=["png", "jpeg", "webp"],
            default="png",
        ),
    },
    required=["prompt"],
)

EDIT_IMAGE_PARAMETERS = object_params(
    {
        "image": string_param("The image to edit (base64 encoded PNG, <4MB, square)."),
        "prompt": string_param("The text description of the desired edit."),
        "mask": string_param(
            "An additional image whose fully transparent areas indicate where the "
            "image should be edited (base64 encoded PNG, <4MB, square)."
        ),
        "model": string_param(
            "The model to use for image editing.",
            enum=["dall-e-2", "gpt-image-1"],
            default="gpt-image-1",
        ),
        "n": _count("Number of images to generate (1-10)."),
        "response_format": _RESPONSE_FORMAT,
        "size": string_param(
            "The size of the generated image.", enum=_SMALL_SIZES, default="1024x1024"
        ),
        "user": _USER,
    },
    required=["image", "prompt"],
)

CREATE_IMAGE_VARIATION_PARAMETERS = object_params(
    {
        "image": string_param(
            "The image to create variations of (base64 encoded PNG, <4MB, square)."
        ),
        "model": string_param(
            "The model to use for image variations.",
            enum=["dall-e-2"],
            default="dall-e-2",
        ),
        "n": _count("Number of images to generate (1-10)."),
        "response_format": _RESPONSE_FORMAT,
        "size": string_param(
            "The size of the generated image.", enum=_SMALL_SIZES, default="1024x1024"
        ),
        "user": _USER,
    },
    required=["image"],
)


def generate_image_tool(client: ProviderClient) -> dict[str, Any]:
    """Create the GenerateImage tool."""

    async def handler(args: dict[str, Any]) -> Any:
        body = {key: args[key] for key in ("prompt", "model", "n", "quality", "size")}
        # gpt-image-1 and the DALL-E models accept disjoint option sets.
        if args["model"] == "gpt-image-1":
            for key in _GPT_IMAGE_OPTIONS:
                body[key] = args[key]
        else:
            body["response_format"] = args["response_format"]
            body["style"] = args["style"]
        if args.get("user"):
            body["user"] = args["user"]
        return await client.post("/v1/images/generations", json_body=body)

    return api_tool(
        "GenerateImage",
        "Generate an image using OpenAI's image generation API.",
        GENERATE_IMAGE_PARAMETERS,
        handler,
    )


def edit_image_tool(client: ProviderClient) -> dict[str, Any]:
    """Create the EditImage tool."""

    async def handler(args: dict[str, Any]) -> Any:
        files = {"image": decode_png(args["image"], "image")}
        if args.get("mask"):
            files["mask"] = decode_png(args["mask"], "mask")
        data = form_fields(
            args, ["prompt", "model", "n", "response_format", "size", "user"]
        )
        return await client.post("/v1/images/edits", data=data, files=files)

    return api_tool(
        "EditImage",
        "Edit an image using OpenAI's image API.",
        EDIT_IMAGE_PARAMETERS,
        handler,
    )


def create_image_variation_tool(client: ProviderClient) -> dict[str, Any]:
    """Create the CreateImageVariation tool."""

    async def handler(args: dict[str, Any]) -> Any:
        files = {"image": decode_png(args["image"], "image")}
        data = form_fields(args, ["model", "n", "response_format", "size", "user"])
        return await client.post("/v1/images/variations", data=data, files=files)

    return api_tool(
        "CreateImageVariation",
        "Create variations of an image using OpenAI's DALL-E API.",
        CREATE_IMAGE_VARIATION_PARAMETERS,
        handler,
    )
