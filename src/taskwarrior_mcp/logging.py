"""structlog setup for the MCP server process.

stdout carries the MCP stdio stream, so every log line, ours and the
SDK's, is written to stderr.
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

import structlog
from structlog.types import Processor

if TYPE_CHECKING:
    from taskwarrior_mcp.config import Settings

_DEFAULT_LEVEL = logging.WARNING


def _level_from(settings: "Settings | None") -> int:
    if settings is None:
        return _DEFAULT_LEVEL
    return logging.getLevelName(settings.log_level.upper())


def _renderer_chain(log_format: str) -> list[Processor]:
    if log_format == "json":
        return [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    # Client log files do not interpret ANSI escapes
    return [
        structlog.dev.ConsoleRenderer(
            colors=False,
            exception_formatter=structlog.dev.plain_traceback,
        )
    ]


def configure_logging(settings: "Settings | None" = None) -> None:
    """Route structlog and the mcp SDK's stdlib loggers to stderr.

    Without settings, only warnings and above are shown in console format.
    """
    level = _level_from(settings)
    log_format = settings.log_format if settings is not None else "console"

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
            *_renderer_chain(log_format),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(levelname)s %(name)s: %(message)s",
        level=level,
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    # The SDK logs every request at INFO
    logging.getLogger("mcp").setLevel(max(level, logging.WARNING))


@contextmanager
def tool_call_context(tool: str) -> Iterator[None]:
    """Tag every log line emitted inside the block with the tool name.

    The binding is removed on exit, so a later call never inherits it.
    """
    with structlog.contextvars.bound_contextvars(tool=tool):
        yield
