"""Command-line interface serving the tool dispatcher over stdio."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, TextIO

from gamecode_tools.dispatcher import Dispatcher
from gamecode_tools.envelope import failure, serialize_response
from gamecode_tools.errors import ParseError
from gamecode_tools.factory import create_dispatcher_with_schema_registry
from gamecode_tools.logging_config import LogLevel, setup_logging
from gamecode_tools.schema import ToolSchemaRegistry
from gamecode_tools.transform import FormatConfig, WireFormat

logger = logging.getLogger(__name__)

CATALOG_FORMATS = ("native", "bedrock", "openai")


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    formats = [member.value for member in WireFormat]
    parser = argparse.ArgumentParser(
        description="Serve filesystem and process tools over JSON-RPC on stdio."
    )
    parser.add_argument(
        "--catalog",
        action="store_true",
        help="Print the available tool catalog as JSON and exit.",
    )
    parser.add_argument(
        "--catalog-format",
        choices=CATALOG_FORMATS,
        default="native",
        help="Shape of the printed catalog.",
    )
    parser.add_argument(
        "--input-format",
        choices=formats,
        default=WireFormat.PLAIN.value,
        help="Encoding of incoming request parameters.",
    )
    parser.add_argument(
        "--output-format",
        choices=formats,
        default=WireFormat.PLAIN.value,
        help="Encoding of outgoing results.",
    )
    parser.add_argument(
        "--log-level",
        choices=[member.value for member in LogLevel],
        type=str.upper,
        default=LogLevel.WARNING.value,
        help="Minimum level of log messages written to stderr.",
    )
    return parser


def render_catalog(registry: ToolSchemaRegistry, catalog_format: str) -> Any:
    """Render the schema registry in the requested catalog shape."""
    if catalog_format == "bedrock":
        return registry.to_bedrock_specs()
    if catalog_format == "openai":
        return registry.to_openai_functions()
    return registry.to_json()


async def handle_line(dispatcher: Dispatcher, line: str) -> str:
    """Dispatch one request line, answering unparseable input with -32700."""
    try:
        return await dispatcher.dispatch(line)
    except ParseError as exc:
        logger.warning("Discarding unparseable request: %s", exc.message)
        return serialize_response(failure(exc, None))


async def serve(dispatcher: Dispatcher, reader: TextIO, writer: TextIO) -> None:
    """Answer newline-delimited requests from ``reader`` until end of input."""
    while True:
        line = await asyncio.to_thread(reader.readline)
        if not line:
            break
        if not line.strip():
            continue
        writer.write(await handle_line(dispatcher, line) + "\n")
        writer.flush()


def main(argv: list[str] | None = None) -> int:
    """Entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    config = FormatConfig.from_names(args.input_format, args.output_format)
    dispatcher, registry = create_dispatcher_with_schema_registry(config)

    if args.catalog:
        catalog = render_catalog(registry, args.catalog_format)
        print(json.dumps(catalog, indent=2))
        return 0

    logger.info("Serving %s", ", ".join(dispatcher.available_methods()))
    asyncio.run(serve(dispatcher, sys.stdin, sys.stdout))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
