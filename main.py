"""Application entrypoint.

Loads settings, prepares the listing database and optionally serves the
listing search tools over MCP stdio.
"""

from __future__ import annotations

import argparse
import sys

from hava_search.core.settings import SettingsError, load_settings
from hava_search.mcp_server import MCPServer
from hava_search.observability.logger import configure_logging, get_logger


def main() -> None:
    parser = argparse.ArgumentParser(description="Hava listing search server")
    parser.add_argument("--settings", default="config/settings.yaml", help="Path to settings YAML")
    parser.add_argument("--serve-stdio", action="store_true", help="Serve MCP over stdin/stdout")
    args = parser.parse_args()

    logger = get_logger("mcp-server")
    try:
        settings = load_settings(args.settings)
    except SettingsError as e:
        logger.error(str(e))
        raise SystemExit(1) from e

    configure_logging(settings.observability.log_level)
    server = MCPServer(settings)
    logger.info(
        "Listing store ready (db=%s, default_limit=%d, trace=%s)",
        settings.search.db_path,
        settings.search.default_limit,
        settings.observability.trace_enabled,
    )

    if not args.serve_stdio:
        logger.info("Use --serve-stdio to start the MCP transport loop")
        return

    logger.info("Starting MCP server (stdio)")
    server.serve_stdio()


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        sys.exit(130)
