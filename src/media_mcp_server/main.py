"""Command-line entry point for the media MCP server."""

from __future__ import annotations

import argparse
import json

import anyio
from dotenv import load_dotenv

from media_mcp.errors import ToolLoadError
from media_mcp.server import CallRequest
from media_mcp_server.config import Settings, configure_logging, logger
from media_mcp_server.fastmcp_adapter import build_fastmcp_app

_NETWORK_TRANSPORTS = ("http", "sse")


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the server CLI."""
    parser = argparse.ArgumentParser(
        description="Serve OpenAI and Luma media tools over MCP."
    )
    parser.add_argument(
        "--transport",
        choices=("stdio", *_NETWORK_TRANSPORTS),
        default="stdio",
        help="MCP transport to serve on.",
    )
    parser.add_argument("--host", help="Bind address for network transports.")
    parser.add_argument("--port", type=int, help="Port for network transports.")
    parser.add_argument("--path", help="URL path for network transports.")
    parser.add_argument(
        "--catalog",
        action="store_true",
        help="Print the tool catalog as JSON and exit.",
    )
    parser.add_argument(
        "--call", metavar="NAME", help="Call one tool, print the result and exit."
    )
    parser.add_argument(
        "--arguments",
        default="{}",
        metavar="JSON",
        help="JSON object of arguments for --call.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with an error if any tool fails to load.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for the server CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    load_dotenv()
    try:
        settings = Settings.from_env()
    except ValueError as e:
        parser.error(str(e))
    configure_logging(settings.log_level)

    try:
        app, dispatcher, report = build_fastmcp_app(settings, strict=args.strict)
    except ToolLoadError as e:
        logger.error("%s", e)
        return 1
    if not report.registered:
        logger.error("No tools could be loaded")
        return 1

    if args.catalog:
        print(json.dumps(dispatcher.describe_tools(), indent=2))
        return 0

    if args.call:
        try:
            arguments = json.loads(args.arguments)
        except json.JSONDecodeError as e:
            parser.error(f"--arguments is not valid JSON: {e}")
        result = anyio.run(dispatcher.call, CallRequest(args.call, arguments))
        print(result.to_json())
        return 0 if result.ok else 1

    run_kwargs: dict[str, object] = {}
    if args.transport in _NETWORK_TRANSPORTS:
        for option in ("host", "port", "path"):
            value = getattr(args, option)
            if value is not None:
                run_kwargs[option] = value
    logger.info("Starting media MCP server on %s", args.transport)
    app.run(transport=args.transport, **run_kwargs)
    return 0


def cli() -> None:
    """Console script wrapper around :func:`main`."""
    raise SystemExit(main())


if __name__ == "__main__":
    cli()
