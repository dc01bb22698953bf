"""
Command-line entrypoint.

  python -m mailchimp_mcp                    # HTTP on $PORT (default 3000), MCP at /mcp
  python -m mailchimp_mcp --transport stdio  # MCP over stdin/stdout
"""

import argparse
import asyncio
import logging
import sys

import uvicorn

from .config import SERVER_NAME, get_settings


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="mailchimp_mcp", description="Mailchimp MCP server")
    parser.add_argument(
        "--transport",
        choices=["http", "stdio"],
        default="http",
        help="How agents connect (default: http)",
    )
    parser.add_argument("--host", default="0.0.0.0", help="HTTP bind address")
    parser.add_argument("--port", type=int, default=None, help="HTTP port (default: $PORT or 3000)")
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    settings = get_settings()

    # stdout carries the MCP stream on stdio, so logs always go to stderr
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    logger = logging.getLogger(SERVER_NAME)

    if not settings.api_key:
        logger.warning("MAILCHIMP_API_KEY is not set; every tool call will fail until it is configured")

    if args.transport == "stdio":
        from .protocol import run_stdio

        asyncio.run(run_stdio())
        return

    port = args.port or settings.port
    logger.info(f"Mailchimp MCP server running on http://localhost:{port}/mcp")
    uvicorn.run("mailchimp_mcp.server:app", host=args.host, port=port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
