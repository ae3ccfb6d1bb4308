"""Taskwarrior tools exposed over MCP.

Six tools, each a thin handler that validates its loosely-typed argument
bag, makes one call on the command wrapper, and renders the response text:

- list_tasks / get_task: pretty-printed JSON
- add_task / complete_task / delete_task / modify_task: a confirmation sentence
"""

import json
from typing import Any

from taskwarrior_mcp.errors import ValidationError
from taskwarrior_mcp.models import AddTaskOptions, ModifyTaskOptions, Task
from taskwarrior_mcp.registry import ToolRegistry
from taskwarrior_mcp.taskwarrior import Taskwarrior

registry = ToolRegistry()


# ---------------------------------------------------------------------------
# Argument validation
# ---------------------------------------------------------------------------


def require_id(args: dict[str, Any]) -> int:
    """Return ``args["id"]`` as a positive integer.

    Integral floats and ASCII digit strings are accepted, since JSON clients
    often send numbers as either.
    """
    value = args.get("id")
    if value is None:
        raise ValidationError("Missing required argument: id", field="id")

    task_id: int | None = None
    if isinstance(value, bool):
        task_id = None
    elif isinstance(value, int):
        task_id = value
    elif isinstance(value, float) and value.is_integer():
        task_id = int(value)
    elif isinstance(value, str) and value.strip().isascii() and value.strip().isdecimal():
        task_id = int(value.strip())

    if task_id is None or task_id <= 0:
        raise ValidationError(
            f"Argument 'id' must be a positive integer, got {value!r}", field="id"
        )
    return task_id


def require_description(args: dict[str, Any]) -> str:
    value = args.get("description")
    if value is None:
        raise ValidationError("Missing required argument: description", field="description")
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(
            "Argument 'description' must be a non-empty string", field="description"
        )
    return value


def optional_str(args: dict[str, Any], name: str) -> str | None:
    """Return a string argument, or None when absent or empty."""
    value = args.get(name)
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValidationError(f"Argument '{name}' must be a string", field=name)
    return value


def optional_tags(args: dict[str, Any]) -> list[str]:
    value = args.get("tags")
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value else []
    if not isinstance(value, list) or not all(isinstance(tag, str) for tag in value):
        raise ValidationError("Argument 'tags' must be a list of strings", field="tags")
    return [tag for tag in value if tag]


def _to_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def _task_json(task: Task) -> str:
    return _to_json(task.to_dict())


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

_ID_PROPERTY = {"type": "number"}

_ATTRIBUTE_PROPERTIES: dict[str, Any] = {
    "due": {
        "type": "string",
        "description": (
            'Due date - supports natural language like "tomorrow", "eom" (end of month), '
            '"eoy" (end of year), or ISO dates like "2024-12-31"'
        ),
    },
    "priority": {
        "type": "string",
        "description": "Priority: H (high), M (medium), or L (low)",
    },
    "project": {
        "type": "string",
        "description": "Project name to organize related tasks",
    },
    "tags": {
        "type": "array",
        "items": {"type": "string"},
        "description": "Array of tags for categorization",
    },
}


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


@registry.register(
    description=(
        "List tasks from the user's Taskwarrior task management system. Supports filters "
        'like "due:today" for today\'s tasks, "due.before:tomorrow" for overdue/today, '
        '"+tagname" for tagged tasks, "project:name" for project tasks, or '
        '"status:pending" for incomplete tasks.'
    ),
    input_schema={
        "type": "object",
        "properties": {
            "filter": {
                "type": "string",
                "description": (
                    'Optional Taskwarrior filter expression (e.g., "due:today", '
                    '"status:pending", "+tag")'
                ),
            },
        },
    },
)
def list_tasks(tw: Taskwarrior, args: dict[str, Any]) -> str:
    tasks = tw.list_tasks(optional_str(args, "filter"))
    return _to_json([task.to_dict() for task in tasks])


@registry.register(
    description=(
        "Add a new task to the user's Taskwarrior task list with description and "
        "optional due date, priority, project, and tags"
    ),
    input_schema={
        "type": "object",
        "properties": {
            "description": {"type": "string", "description": "Task description"},
            **_ATTRIBUTE_PROPERTIES,
        },
        "required": ["description"],
    },
)
def add_task(tw: Taskwarrior, args: dict[str, Any]) -> str:
    description = require_description(args)
    options = AddTaskOptions(
        due=optional_str(args, "due"),
        priority=optional_str(args, "priority"),
        project=optional_str(args, "project"),
        tags=optional_tags(args),
    )
    task_id = tw.add_task(description, options)
    return f"Created task {task_id}"


@registry.register(
    description="Mark a task as completed/done in the user's Taskwarrior task list",
    input_schema={
        "type": "object",
        "properties": {
            "id": {**_ID_PROPERTY, "description": "Task ID from list_tasks output"},
        },
        "required": ["id"],
    },
)
def complete_task(tw: Taskwarrior, args: dict[str, Any]) -> str:
    task_id = require_id(args)
    tw.complete_task(task_id)
    return f"Completed task {task_id}"


@registry.register(
    description="Delete a task from the user's Taskwarrior task list",
    input_schema={
        "type": "object",
        "properties": {
            "id": {**_ID_PROPERTY, "description": "Task ID to delete"},
        },
        "required": ["id"],
    },
)
def delete_task(tw: Taskwarrior, args: dict[str, Any]) -> str:
    task_id = require_id(args)
    tw.delete_task(task_id)
    return f"Deleted task {task_id}"


@registry.register(
    description=(
        "Modify an existing task's properties (due date, priority, project, tags, "
        "description) in the user's Taskwarrior task list"
    ),
    input_schema={
        "type": "object",
        "properties": {
            "id": {**_ID_PROPERTY, "description": "Task ID to modify"},
            "description": {"type": "string", "description": "New task description"},
            "due": {
                "type": "string",
                "description": 'New due date (supports natural language like "tomorrow" or ISO dates)',
            },
            "priority": {
                "type": "string",
                "description": "New priority: H (high), M (medium), or L (low)",
            },
            "project": {"type": "string", "description": "New project name"},
            "tags": {
                "type": "array",
                "items": {"type": "string"},
                "description": "Tags to add to the task",
            },
        },
        "required": ["id"],
    },
)
def modify_task(tw: Taskwarrior, args: dict[str, Any]) -> str:
    task_id = require_id(args)
    updates = ModifyTaskOptions(
        description=optional_str(args, "description"),
        due=optional_str(args, "due"),
        priority=optional_str(args, "priority"),
        project=optional_str(args, "project"),
        tags=optional_tags(args),
    )
    tw.modify_task(task_id, updates)
    return f"Modified task {task_id}"


@registry.register(
    description=(
        "Get detailed information about a specific task from the user's Taskwarrior "
        "task list by ID"
    ),
    input_schema={
        "type": "object",
        "properties": {
            "id": {**_ID_PROPERTY, "description": "Task ID to retrieve"},
        },
        "required": ["id"],
    },
)
def get_task(tw: Taskwarrior, args: dict[str, Any]) -> str:
    task_id = require_id(args)
    return _task_json(tw.get_task(task_id))
