"""OpenAI Files API tools."""

from __future__ import annotations

from typing import Any

import anyio

from media_mcp.tools import api_tool
from media_mcp_server.providers import ProviderClient
from media_mcp_server.tools.common import (
    OPENAI_FILE_PURPOSES,
    object_params,
    path_segment,
    string_param,
)


def _file_id_params(description: str) -> dict[str, Any]:
    return object_params({"file_id": string_param(description)}, required=["file_id"])


UPLOAD_FILE_PARAMETERS = object_params(
    {
        "file_path": string_param("The path to the file to upload."),
        "purpose": string_param(
            "The purpose of the uploaded file.",
            enum=OPENAI_FILE_PURPOSES,
            default="assistants",
        ),
    },
    required=["file_path"],
)

LIST_FILES_PARAMETERS = object_params(
    {
        "purpose": string_param("Filter files by purpose.", enum=OPENAI_FILE_PURPOSES),
        "limit": {
            "type": "integer",
            "description": "Limit the number of files returned (max 10000).",
            "minimum": 1,
            "maximum": 10000,
            "default": 20,
        },
        "after": string_param("Return files after this file ID for pagination."),
        "before": string_param("Return files before this file ID for pagination."),
    }
)


def upload_file_tool(client: ProviderClient) -> dict[str, Any]:
    """Create the UploadFile tool."""

    async def handler(args: dict[str, Any]) -> Any:
        path = anyio.Path(args["file_path"])
        if not await path.is_file():
            raise FileNotFoundError(f"File not found: {args['file_path']}")
        content = await path.read_bytes()
        return await client.post(
            "/v1/files",
            data={"purpose": args["purpose"]},
            files={"file": (path.name, content)},
        )

    return api_tool(
        "UploadFile",
        "Upload a file to OpenAI's Files API.",
        UPLOAD_FILE_PARAMETERS,
        handler,
    )


def list_files_tool(client: ProviderClient) -> dict[str, Any]:
    """Create the ListFiles tool."""

    async def handler(args: dict[str, Any]) -> Any:
        params = {key: args.get(key) for key in ("purpose", "limit", "after", "before")}
        return await client.get("/v1/files", params=params)

    return api_tool(
        "ListFiles",
        "List files from OpenAI's Files API.",
        LIST_FILES_PARAMETERS,
        handler,
    )


def retrieve_file_tool(client: ProviderClient) -> dict[str, Any]:
    """Create the RetrieveFile tool."""

    async def handler(args: dict[str, Any]) -> Any:
        return await client.get(f"/v1/files/{path_segment(args['file_id'])}")

    return api_tool(
        "RetrieveFile",
        "Retrieve file information from OpenAI's Files API.",
        _file_id_params("The ID of the file to retrieve."),
        handler,
    )


def retrieve_file_content_tool(client: ProviderClient) -> dict[str, Any]:
    """Create the RetrieveFileContent tool."""

    async def handler(args: dict[str, Any]) -> dict[str, str]:
        content = await client.get(
            f"/v1/files/{path_segment(args['file_id'])}/content", as_text=True
        )
        return {"content": content}

    return api_tool(
        "RetrieveFileContent",
        "Retrieve file content from OpenAI's Files API.",
        _file_id_params("The ID of the file to retrieve content from."),
        handler,
    )


def delete_file_tool(client: ProviderClient) -> dict[str, Any]:
    """Create the DeleteFile tool."""

    async def handler(args: dict[str, Any]) -> Any:
        return await client.delete(f"/v1/files/{path_segment(args['file_id'])}")

    return api_tool(
        "DeleteFile",
        "Delete a file from OpenAI's Files API.",
        _file_id_params("The ID of the file to delete."),
        handler,
    )
