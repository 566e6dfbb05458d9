"""Entry point for the gamecode tools MCP server."""

from __future__ import annotations

import argparse
from typing import Any

from gamecode_tools.logging_config import LogLevel, setup_logging
from gamecode_tools.transform import FormatConfig, WireFormat
from gamecode_tools_server.fastmcp_adapter import build_fastmcp_app

NETWORK_TRANSPORTS = ("http", "sse")


def build_parser() -> argparse.ArgumentParser:
    formats = [member.value for member in WireFormat]
    parser = argparse.ArgumentParser(description="gamecode tools MCP server")
    parser.add_argument(
        "--transport", choices=("stdio", *NETWORK_TRANSPORTS), default="stdio"
    )
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--path", default="/mcp")
    parser.add_argument(
        "--input-format", choices=formats, default=WireFormat.PLAIN.value
    )
    parser.add_argument(
        "--output-format", choices=formats, default=WireFormat.PLAIN.value
    )
    parser.add_argument(
        "--log-level",
        choices=[member.value for member in LogLevel],
        type=str.upper,
        default=LogLevel.WARNING.value,
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Build the FastMCP app and run it on the selected transport."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    config = FormatConfig.from_names(args.input_format, args.output_format)
    app, _ = build_fastmcp_app(config)

    options: dict[str, Any] = {}
    if args.transport in NETWORK_TRANSPORTS:
        options = {"host": args.host, "port": args.port, "path": args.path}
    app.run(transport=args.transport, **options)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
