"""Error types raised by the command wrapper and the dispatcher.

Every error carries a human-readable message (what the calling agent sees)
and a machine-readable error code (what goes into the logs).
"""

from typing import Any


class ErrorCode:
    """Standard error codes."""

    INVALID_INPUT = "INVALID_INPUT"
    NOT_FOUND = "NOT_FOUND"
    PARSE_ERROR = "PARSE_ERROR"
    TASKWARRIOR_ERROR = "TASKWARRIOR_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ToolError(Exception):
    """Base error for tool failures.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code
        details: Additional error details
    """

    error_code: str = ErrorCode.INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        if error_code is not None:
            self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "message": self.message,
            "code": self.error_code,
            "details": self.details,
        }


class TaskwarriorError(ToolError):
    """The task process exited abnormally or could not be started."""

    error_code = ErrorCode.TASKWARRIOR_ERROR


class TaskParseError(ToolError):
    """Output from the task process could not be parsed."""

    error_code = ErrorCode.PARSE_ERROR


class TaskNotFoundError(ToolError):
    """No exported record matches the requested identifier."""

    error_code = ErrorCode.NOT_FOUND

    def __init__(self, task_id: int):
        super().__init__(f"Task {task_id} not found", details={"id": task_id})
        self.task_id = task_id


class ValidationError(ToolError):
    """A tool argument is missing or has the wrong shape."""

    error_code = ErrorCode.INVALID_INPUT

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message, details={"field": field} if field else None)
        self.field = field


class UnknownToolError(ToolError):
    """The requested tool name is not registered."""

    error_code = ErrorCode.NOT_FOUND

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}", details={"name": name})
        self.name = name
