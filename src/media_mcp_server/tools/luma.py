"""Luma Dream Machine image and video generation tools."""

from __future__ import annotations

from typing import Any

from media_mcp.tools import api_tool
from media_mcp_server.providers import ProviderClient
from media_mcp_server.tools.common import (
    ASPECT_RATIOS,
    GENERATION_ID_PATTERN,
    LUMA_IMAGE_MODELS,
    LUMA_RESOLUTIONS,
    LUMA_VIDEO_MODELS,
    object_params,
    path_segment,
    reference_images_param,
    string_param,
    video_duration,
)

GENERATIONS_PATH = "/dream-machine/v1/generations"
IMAGE_PATH = f"{GENERATIONS_PATH}/image"
VIDEO_PATH = f"{GENERATIONS_PATH}/video"

_PROMPT = string_param("The prompt for generating the image.")
_IMAGE_MODEL = string_param(
    "The model to use for image generation.",
    enum=LUMA_IMAGE_MODELS,
    default="photon-flash-1",
)
_IMAGE_ASPECT_RATIO = string_param(
    "The aspect ratio of the generated image.", enum=ASPECT_RATIOS, default="16:9"
)

_VIDEO_OPTIONS: dict[str, Any] = {
    "model": string_param(
        "The model to use for video generation.",
        enum=LUMA_VIDEO_MODELS,
        default="ray-flash-2",
    ),
    "aspect_ratio": string_param(
        "The aspect ratio of the generated video.", enum=ASPECT_RATIOS, default="16:9"
    ),
    "resolution": string_param(
        "The resolution of the generated video.", enum=LUMA_RESOLUTIONS, default="720p"
    ),
    "duration": {
        "type": "number",
        "description": "The duration of the video in seconds.",
        "minimum": 1,
        "maximum": 10,
        "default": 5,
    },
    "loop": {
        "type": "boolean",
        "description": "Whether the video should loop seamlessly.",
        "default": False,
    },
}

GENERATE_VIDEO_PARAMETERS = object_params(
    {"prompt": string_param("The prompt for generating the video."), **_VIDEO_OPTIONS},
    required=["prompt"],
)

GENERATE_VIDEO_FROM_IMAGE_PARAMETERS = object_params(
    {
        "prompt": string_param("The prompt for generating the video."),
        "keyframe_url": string_param(
            "The URL of the keyframe image to animate.", format="uri"
        ),
        **_VIDEO_OPTIONS,
    },
    required=["prompt", "keyframe_url"],
)

GENERATE_IMAGE_PARAMETERS = object_params(
    {
        "prompt": _PROMPT,
        "model": _IMAGE_MODEL,
        "aspect_ratio": _IMAGE_ASPECT_RATIO,
    },
    required=["prompt"],
)

GENERATE_IMAGE_WITH_REFERENCE_PARAMETERS = object_params(
    {
        "prompt": _PROMPT,
        "image_ref": reference_images_param(
            "Reference images with URLs and weights (1-4 images).",
            weight=0.85,
            maxItems=4,
        ),
        "model": _IMAGE_MODEL,
        "aspect_ratio": _IMAGE_ASPECT_RATIO,
    },
    required=["prompt", "image_ref"],
)

GENERATE_IMAGE_WITH_STYLE_PARAMETERS = object_params(
    {
        "prompt": _PROMPT,
        "style_ref": reference_images_param(
            "Style reference images with URLs and weights.", weight=0.8
        ),
        "model": _IMAGE_MODEL,
        "aspect_ratio": _IMAGE_ASPECT_RATIO,
    },
    required=["prompt", "style_ref"],
)

GENERATE_IMAGE_WITH_CHARACTER_PARAMETERS = object_params(
    {
        "prompt": _PROMPT,
        "character_ref": {
            "type": "object",
            "description": "Character reference object with identity and images.",
            "properties": {
                "identity0": {
                    "type": "object",
                    "properties": {
                        "images": {
                            "type": "array",
                            "description": "Character reference image URLs (1-4).",
                            "items": {"type": "string", "format": "uri"},
                            "minItems": 1,
                            "maxItems": 4,
                        }
                    },
                    "required": ["images"],
                }
            },
            "required": ["identity0"],
        },
        "model": _IMAGE_MODEL,
        "aspect_ratio": _IMAGE_ASPECT_RATIO,
    },
    required=["prompt", "character_ref"],
)

MODIFY_IMAGE_PARAMETERS = object_params(
    {
        "prompt": string_param(
            "The prompt describing what changes to make to the image."
        ),
        "modify_image_ref": {
            "type": "object",
            "description": "Reference to the image to modify with URL and weight.",
            "properties": {
                "url": string_param("URL of the image to modify.", format="uri"),
                "weight": {
                    "type": "number",
                    "description": (
                        "Influence of the input image (0.0-1.0). Higher stays "
                        "closer to the original; use 0.0-0.1 for color changes."
                    ),
                    "minimum": 0.0,
                    "maximum": 1.0,
                    "default": 1.0,
                },
            },
            "required": ["url"],
        },
        "model": _IMAGE_MODEL,
        "aspect_ratio": _IMAGE_ASPECT_RATIO,
    },
    required=["prompt", "modify_image_ref"],
)


def _generation_id_params(description: str) -> dict[str, Any]:
    return object_params(
        {
            "generation_id": string_param(
                description, pattern=GENERATION_ID_PATTERN
            )
        },
        required=["generation_id"],
    )


def _video_body(args: dict[str, Any]) -> dict[str, Any]:
    return {
        "generation_type": "video",
        "prompt": args["prompt"],
        "model": args["model"],
        "aspect_ratio": args["aspect_ratio"],
        "resolution": args["resolution"],
        "duration": video_duration(args["duration"]),
        "loop": args["loop"],
    }


def _image_tool(
    client: ProviderClient,
    name: str,
    description: str,
    parameters: dict[str, Any],
    reference_key: str | None = None,
) -> dict[str, Any]:
    """Build an image generation tool, optionally carrying one reference field."""

    async def handler(args: dict[str, Any]) -> Any:
        body: dict[str, Any] = {"prompt": args["prompt"]}
        if reference_key is not None:
            body[reference_key] = args[reference_key]
        body["model"] = args["model"]
        body["aspect_ratio"] = args["aspect_ratio"]
        return await client.post(IMAGE_PATH, json_body=body)

    return api_tool(name, description, parameters, handler)


def generate_video_tool(client: ProviderClient) -> dict[str, Any]:
    """Create the GenerateVideo tool."""

    async def handler(args: dict[str, Any]) -> Any:
        body = _video_body(args)
        body.update(keyframes=None, callback_url=None, concepts=None)
        return await client.post(VIDEO_PATH, json_body=body)

    return api_tool(
        "GenerateVideo",
        "Generate a video using the Luma Video Generation API.",
        GENERATE_VIDEO_PARAMETERS,
        handler,
    )


def generate_video_from_image_tool(client: ProviderClient) -> dict[str, Any]:
    """Create the GenerateVideoFromImage tool."""

    async def handler(args: dict[str, Any]) -> Any:
        body = _video_body(args)
        body["keyframes"] = {"frame0": {"type": "image", "url": args["keyframe_url"]}}
        return await client.post(VIDEO_PATH, json_body=body)

    return api_tool(
        "GenerateVideoFromImage",
        "Generate a video from an image using the Luma Video Generation API.",
        GENERATE_VIDEO_FROM_IMAGE_PARAMETERS,
        handler,
    )


def generate_image_tool(client: ProviderClient) -> dict[str, Any]:
    """Create the GenerateLumaImage tool."""
    return _image_tool(
        client,
        "GenerateLumaImage",
        "Generate an image using the Luma API.",
        GENERATE_IMAGE_PARAMETERS,
    )


def generate_image_with_reference_tool(client: ProviderClient) -> dict[str, Any]:
    """Create the GenerateImageWithReference tool."""
    return _image_tool(
        client,
        "GenerateImageWithReference",
        "Generate an image with reference images using the Luma API. "
        "Use up to 4 reference images to guide the generation.",
        GENERATE_IMAGE_WITH_REFERENCE_PARAMETERS,
        reference_key="image_ref",
    )


def generate_image_with_style_tool(client: ProviderClient) -> dict[str, Any]:
    """Create the GenerateImageWithStyle tool."""
    return _image_tool(
        client,
        "GenerateImageWithStyle",
        "Generate an image with style reference using the Luma API. "
        "Apply specific artistic styles to your generation.",
        GENERATE_IMAGE_WITH_STYLE_PARAMETERS,
        reference_key="style_ref",
    )


def generate_image_with_character_tool(client: ProviderClient) -> dict[str, Any]:
    """Create the GenerateImageWithCharacter tool."""
    return _image_tool(
        client,
        "GenerateImageWithCharacter",
        "Generate an image with character reference using the Luma API. Create "
        "consistent characters using up to 4 reference images.",
        GENERATE_IMAGE_WITH_CHARACTER_PARAMETERS,
        reference_key="character_ref",
    )


def modify_image_tool(client: ProviderClient) -> dict[str, Any]:
    """Create the ModifyImage tool."""
    return _image_tool(
        client,
        "ModifyImage",
        "Modify an existing image using the Luma API. Works well for changing "
        "objects and shapes; color changes may need a weight of 0.0-0.1.",
        MODIFY_IMAGE_PARAMETERS,
        reference_key="modify_image_ref",
    )


def get_generation_tool(client: ProviderClient) -> dict[str, Any]:
    """Create the GetGeneration tool."""

    async def handler(args: dict[str, Any]) -> Any:
        generation_id = path_segment(args["generation_id"])
        return await client.get(f"{GENERATIONS_PATH}/{generation_id}")

    return api_tool(
        "GetGeneration",
        "Get a specific generation by ID from the Luma API.",
        _generation_id_params("The ID of the generation to retrieve."),
        handler,
    )


def list_generations_tool(client: ProviderClient) -> dict[str, Any]:
    """Create the list_generations tool."""

    async def handler(args: dict[str, Any]) -> Any:
        return await client.get(GENERATIONS_PATH)

    return api_tool(
        "list_generations",
        "List video generations from the Luma API.",
        object_params({}),
        handler,
    )


def delete_generation_tool(client: ProviderClient) -> dict[str, Any]:
    """Create the DeleteGeneration tool."""

    async def handler(args: dict[str, Any]) -> Any:
        generation_id = args["generation_id"]
        await client.delete(f"{GENERATIONS_PATH}/{path_segment(generation_id)}")
        # Luma answers with an empty or undocumented body.
        return {
            "success": True,
            "message": f"Generation {generation_id} deleted successfully.",
            "generation_id": generation_id,
        }

    return api_tool(
        "DeleteGeneration",
        "Delete a generation by ID from the Luma API.",
        _generation_id_params("The ID of the generation to delete."),
        handler,
    )
