"""Tool registration table for the media MCP server.

Every tool is addressed by a stable reference of the form ``<toolset>/<tool>``.
The table below maps each reference to the provider it talks to and the factory
that builds its tool module object; nothing is imported by name at runtime.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

import httpx

from media_mcp.registry import LoadReport, ToolRegistry, ToolResolver
from media_mcp_server.config import LUMA, OPENAI_FILES, OPENAI_IMAGES, Settings
from media_mcp_server.providers import ProviderClient
from media_mcp_server.tools import luma, openai_files, openai_images

ToolFactory = Callable[[ProviderClient], object]

TOOL_TABLE: dict[str, tuple[str, ToolFactory]] = {
    f"{OPENAI_IMAGES}/generate-image": ("openai", openai_images.generate_image_tool),
    f"{OPENAI_IMAGES}/edit-image": ("openai", openai_images.edit_image_tool),
    f"{OPENAI_IMAGES}/create-image-variation": (
        "openai",
        openai_images.create_image_variation_tool,
    ),
    f"{OPENAI_FILES}/upload-file": ("openai", openai_files.upload_file_tool),
    f"{OPENAI_FILES}/list-files": ("openai", openai_files.list_files_tool),
    f"{OPENAI_FILES}/retrieve-file": ("openai", openai_files.retrieve_file_tool),
    f"{OPENAI_FILES}/retrieve-file-content": (
        "openai",
        openai_files.retrieve_file_content_tool,
    ),
    f"{OPENAI_FILES}/delete-file": ("openai", openai_files.delete_file_tool),
    f"{LUMA}/generate-video": ("luma", luma.generate_video_tool),
    f"{LUMA}/generate-video-from-image": ("luma", luma.generate_video_from_image_tool),
    f"{LUMA}/generate-image": ("luma", luma.generate_image_tool),
    f"{LUMA}/generate-image-with-reference": (
        "luma",
        luma.generate_image_with_reference_tool,
    ),
    f"{LUMA}/generate-image-with-style": ("luma", luma.generate_image_with_style_tool),
    f"{LUMA}/generate-image-with-character": (
        "luma",
        luma.generate_image_with_character_tool,
    ),
    f"{LUMA}/modify-image": ("luma", luma.modify_image_tool),
    f"{LUMA}/get-generation": ("luma", luma.get_generation_tool),
    f"{LUMA}/list-generations": ("luma", luma.list_generations_tool),
    f"{LUMA}/delete-generation": ("luma", luma.delete_generation_tool),
}


def tool_references(toolsets: Iterable[str]) -> list[str]:
    """Return table references belonging to ``toolsets``, in table order."""
    selected = set(toolsets)
    return [
        reference
        for reference in TOOL_TABLE
        if reference.split("/", 1)[0] in selected
    ]


def build_resolver(
    settings: Settings, transport: httpx.AsyncBaseTransport | None = None
) -> ToolResolver:
    """Create a resolver that maps table references to tool module objects."""
    clients = {
        "openai": ProviderClient.openai(settings, transport),
        "luma": ProviderClient.luma(settings, transport),
    }

    def resolve(reference: str) -> object:
        try:
            provider, factory = TOOL_TABLE[reference]
        except KeyError:
            raise LookupError(f"Unknown tool reference '{reference}'") from None
        return factory(clients[provider])

    return resolve


def build_registry(
    settings: Settings,
    *,
    references: Iterable[str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    strict: bool = False,
) -> tuple[ToolRegistry, LoadReport]:
    """Load the configured toolsets into a new registry.

    Args:
        settings: Provider credentials, timeouts and enabled toolsets.
        references: Explicit references to load instead of the enabled toolsets.
        transport: Optional httpx transport shared by the provider clients.
        strict: Raise on the first tool that fails to load.
    """
    registry = ToolRegistry()
    if references is None:
        references = tool_references(settings.toolsets)
    report = registry.load_from(
        references, build_resolver(settings, transport), strict=strict
    )
    return registry, report
