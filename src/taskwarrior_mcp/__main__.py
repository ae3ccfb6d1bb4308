"""Entry point: python -m taskwarrior_mcp"""

import asyncio
import sys

import structlog

from taskwarrior_mcp.config import get_settings
from taskwarrior_mcp.logging import configure_logging
from taskwarrior_mcp.server import serve


def main() -> int:
    try:
        settings = get_settings()
    except Exception as e:
        print(f"taskwarrior-mcp: invalid configuration: {e}", file=sys.stderr)
        return 1

    configure_logging(settings)
    logger = structlog.get_logger("taskwarrior_mcp")

    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        return 0
    except Exception:
        logger.exception("server.fatal")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
