#!/usr/bin/env python3
"""
Entry point for the CHUK Chords MCP Server.

Runs the chord drill tools over stdio or HTTP. Project levels are read
from ./levels unless --levels-dir points elsewhere.
"""

import argparse
import logging
import os

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main() -> None:
    """Main entry point with transport detection."""
    parser = argparse.ArgumentParser(description="CHUK Chords MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default="stdio",
        help="Transport mode (default: stdio)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="HTTP port (only for http transport)",
    )
    parser.add_argument(
        "--levels-dir",
        help="Directory of project levels (default: ./levels)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)
    if args.levels_dir:
        os.environ["CHUK_CHORDS_LEVELS_DIR"] = args.levels_dir

    # Import after argument parsing so --debug and --levels-dir apply to server setup
    from chuk_mcp_chords.async_server import mcp

    if args.transport == "stdio":
        logger.info("Starting CHUK Chords MCP Server (stdio)")
        mcp.run_stdio()
    else:
        logger.info(f"Starting CHUK Chords MCP Server (http:{args.port})")
        mcp.run(port=args.port, stdio=False)


if __name__ == "__main__":
    main()
