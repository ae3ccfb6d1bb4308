"""Taskwarrior MCP - expose a local Taskwarrior to agents over MCP.

This package is a thin adapter between the Model Context Protocol and the
Taskwarrior ``task`` command:

- Taskwarrior: command wrapper, one ``task`` process per operation
- Dispatcher: routes tool calls and normalizes results into envelopes
- create_server / serve: the MCP server over stdio

Taskwarrior itself remains the only owner of task storage, filtering and
urgency.
"""

from taskwarrior_mcp.config import Settings, get_settings, reload_settings, set_settings
from taskwarrior_mcp.dispatcher import Dispatcher
from taskwarrior_mcp.errors import (
    TaskNotFoundError,
    TaskParseError,
    TaskwarriorError,
    ToolError,
    UnknownToolError,
    ValidationError,
)
from taskwarrior_mcp.models import AddTaskOptions, ModifyTaskOptions, Task
from taskwarrior_mcp.registry import ToolDefinition, ToolRegistry, ToolResult
from taskwarrior_mcp.taskwarrior import Taskwarrior

__all__ = [
    "AddTaskOptions",
    "Dispatcher",
    "ModifyTaskOptions",
    "Settings",
    "Task",
    "TaskNotFoundError",
    "TaskParseError",
    "Taskwarrior",
    "TaskwarriorError",
    "ToolDefinition",
    "ToolError",
    "ToolRegistry",
    "ToolResult",
    "UnknownToolError",
    "ValidationError",
    "get_settings",
    "reload_settings",
    "set_settings",
]
