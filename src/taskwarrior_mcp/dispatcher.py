"""Stateless request dispatcher.

Maps a tool name and argument bag to a registered handler and normalizes
whatever happens into a ToolResult. Every failure, from argument validation
to a crashed ``task`` process, becomes an error-flagged result; nothing
escapes to the transport as a raw exception.
"""

import time
from typing import Any

import structlog

from taskwarrior_mcp.errors import ToolError, UnknownToolError
from taskwarrior_mcp.logging import tool_call_context
from taskwarrior_mcp.registry import ToolDefinition, ToolRegistry, ToolResult
from taskwarrior_mcp.taskwarrior import Taskwarrior
from taskwarrior_mcp.tools import registry as default_registry

logger = structlog.get_logger(__name__)


class Dispatcher:
    """Routes tool calls to handlers backed by one Taskwarrior wrapper.

    Example:
        >>> dispatcher = Dispatcher(Taskwarrior())
        >>> dispatcher.dispatch("add_task", {"description": "Buy milk"})
        ToolResult(text='Created task 1', is_error=False)
    """

    def __init__(
        self,
        taskwarrior: Taskwarrior,
        registry: ToolRegistry | None = None,
    ) -> None:
        self.taskwarrior = taskwarrior
        self.registry = registry if registry is not None else default_registry

    def list_tools(self) -> list[ToolDefinition]:
        return self.registry.list_tools()

    def dispatch(self, name: str, arguments: dict[str, Any] | None = None) -> ToolResult:
        """Run the named tool and wrap its outcome.

        Log lines emitted while the tool runs, including the command
        wrapper's, carry ``tool=<name>``.
        """
        with tool_call_context(name):
            return self._dispatch(name, arguments if isinstance(arguments, dict) else {})

    def _dispatch(self, name: str, args: dict[str, Any]) -> ToolResult:
        start_time = time.time()
        logger.info("dispatcher.call", arguments=args)

        try:
            tool = self.registry.get(name)
            if tool is None:
                raise UnknownToolError(name)
            text = tool.func(self.taskwarrior, args)
        except ToolError as e:
            logger.warning(
                "dispatcher.error",
                code=e.error_code,
                error=e.message,
                duration_ms=round((time.time() - start_time) * 1000, 2),
            )
            return ToolResult.fail(e.message)
        except Exception as e:
            logger.exception("dispatcher.unexpected_error")
            return ToolResult.fail(str(e) or type(e).__name__)

        logger.info("dispatcher.done", duration_ms=round((time.time() - start_time) * 1000, 2))
        return ToolResult.ok(text)
