#!/usr/bin/env python3
"""Command line entry point for decoding and normalising MCP wire JSON."""

import argparse
import json
import logging
import sys
from typing import Any, Dict, Optional, TextIO
import structlog
from prometheus_client import generate_latest

from mcp_wire.config import WireConfig, load_config, create_sample_config
from mcp_wire.protocol.codec import (
    decode_content,
    decode_message,
    decode_params,
    dump_json,
    dump_message,
)
from mcp_wire.protocol.content import dump_content
from mcp_wire.protocol.errors import WireError
from mcp_wire.protocol.messages import MCPError


def setup_logging(level: str = "info", debug: bool = False) -> None:
    """Setup structured logging."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if debug:
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Logs go to stderr so stdout stays valid JSON
    logging.basicConfig(level=log_level, format="%(message)s", stream=sys.stderr)


def decode_document(kind: str, raw: str) -> Dict[str, Any]:
    """Decode ``raw`` as the given kind and describe the result."""
    if kind == "params":
        params = decode_params(raw)
        return {
            "meta": params.meta,
            "additional_fields": params.additional_fields,
            "wire": params.to_wire(),
        }
    elif kind == "content":
        content = decode_content(raw)
        return {
            "variant": type(content).__name__,
            "wire": dump_content(content),
        }
    elif kind == "message":
        message = decode_message(raw)
        return {
            "variant": type(message).__name__,
            "wire": dump_message(message),
        }
    else:
        raise ValueError(f"Unknown document kind: {kind}")


def run(kind: str, source: TextIO, config: WireConfig, out: Optional[TextIO] = None) -> int:
    """Decode one document from ``source`` and print it; returns an exit code."""
    out = out or sys.stdout
    logger = structlog.get_logger()
    raw = source.read()

    try:
        decoded = decode_document(kind, raw)
    except WireError as e:
        logger.error("Decode failed", kind=kind, code=int(e.code), error=e.message)
        error = MCPError.from_exception(e)
        print(dump_json(error.model_dump(exclude_none=True), config.indent), file=out)
        return 1

    print(dump_json(decoded, config.indent, config.sort_keys), file=out)

    if config.metrics_enabled:
        sys.stderr.write(generate_latest().decode("utf-8"))
    return 0


def main(argv: Optional[list] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Decode and normalise MCP wire JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Split params into _meta and caller fields
  echo '{"_meta": {"a": 1}, "x": 2}' | python main.py --kind params

  # Decode a content value
  python main.py --kind content image.json

  # Decode a whole JSON-RPC message with pretty output
  MCP_WIRE_INDENT=2 python main.py --kind message request.json

  # Generate sample config
  python main.py --sample-config
"""
    )

    parser.add_argument(
        "input",
        nargs="?",
        help="JSON file to decode (defaults to stdin)"
    )
    parser.add_argument(
        "--kind",
        "-k",
        choices=["params", "content", "message"],
        default="message",
        help="What the input holds"
    )
    parser.add_argument(
        "--config",
        "-c",
        help="Configuration file path (JSON format)"
    )
    parser.add_argument(
        "--sample-config",
        action="store_true",
        help="Generate sample configuration and exit"
    )
    parser.add_argument(
        "--validate-config",
        action="store_true",
        help="Validate configuration and exit"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args(argv)

    if args.sample_config:
        print(json.dumps(create_sample_config(), indent=2))
        return 0

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    if args.validate_config:
        print("Configuration is valid")
        print(json.dumps(config.to_dict(), indent=2))
        return 0

    if args.debug:
        config.debug = True
        config.log_level = "debug"

    setup_logging(config.log_level, config.debug)

    if args.input:
        with open(args.input, "r") as f:
            return run(args.kind, f, config)
    return run(args.kind, sys.stdin, config)


if __name__ == "__main__":
    sys.exit(main())
