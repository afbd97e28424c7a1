#!/usr/bin/env python3
"""Entry point for fruitmail-mcp CLI."""

import logging

from fruitmail.config import Settings
from fruitmail.server import configure, mcp


def main():
    """Run the Fruitmail MCP server."""
    settings = Settings.from_env()
    # stdout carries the MCP stdio stream
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)-8s %(name)s - %(message)s",
    )
    configure(settings)
    mcp.run()


if __name__ == "__main__":
    main()
