from __future__ import annotations

import argparse
import sys
from dataclasses import replace

from .server import StdioServer, create_handler
from .shared.config import load_config
from .shared.logging import configure_logging, get_logger

logger = get_logger(__name__)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="todo-mcp", description="Todo list MCP server over stdio")
    parser.add_argument("--config", help="path to a JSON config file (default: $TODO_MCP_CONFIG)")
    parser.add_argument("--log-level", help="override the configured log level")
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    config = load_config(args.config)
    if args.log_level:
        config = replace(config, logging=replace(config.logging, level=args.log_level))
    configure_logging(config.logging)

    try:
        StdioServer(create_handler(config.server)).run()
    except KeyboardInterrupt:
        logger.info("Interrupted")
    except Exception as exc:  # noqa: BLE001
        logger.exception("Uncaught exception: %s", exc)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
