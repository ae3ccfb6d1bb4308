"""Command wrapper around the Taskwarrior ``task`` program.

Each operation builds one argument list, runs ``task`` once, and parses
its output: the JSON export format for reads, the confirmation text for
``add``. Storage, filtering and urgency all stay with Taskwarrior.

Example:
    >>> tw = Taskwarrior(task_data="/tmp/tasks")
    >>> task_id = tw.add_task("Buy milk", AddTaskOptions(project="home"))
    >>> tw.get_task(task_id).description
    'Buy milk'
"""

import json
import os
import re
import shlex
import subprocess
from pathlib import Path

import structlog

from taskwarrior_mcp.config import Settings
from taskwarrior_mcp.errors import (
    TaskNotFoundError,
    TaskParseError,
    TaskwarriorError,
    ValidationError,
)
from taskwarrior_mcp.models import AddTaskOptions, ModifyTaskOptions, Task

logger = structlog.get_logger(__name__)

# Environment variable Taskwarrior reads its data directory from
TASKDATA_ENV = "TASKDATA"

# Report override that keeps soft-deleted records out of listings
LIST_FILTER_OVERRIDE = "rc.report.next.filter=status.not:deleted"
CONFIRMATION_OFF = "rc.confirmation=off"

_CREATED_RE = re.compile(r"Created task (\d+)")


def _attribute_args(options: AddTaskOptions) -> list[str]:
    args = []
    if options.due:
        args.append(f"due:{options.due}")
    if options.priority:
        args.append(f"priority:{options.priority}")
    if options.project:
        args.append(f"project:{options.project}")
    for tag in options.tags or []:
        args.append(f"+{tag}")
    return args


def build_list_args(filter: str | None = None) -> list[str]:
    """Arguments for listing tasks matching ``filter``.

    The filter is trusted free text in Taskwarrior's own grammar. It is
    split into words the way a shell would, since ``task`` is run without one.
    """
    args = [LIST_FILTER_OVERRIDE]
    if filter and filter.strip():
        try:
            args.extend(shlex.split(filter))
        except ValueError as e:
            raise ValidationError(
                f"Invalid filter expression: {e}", field="filter"
            ) from e
    args.append("export")
    return args


def build_add_args(description: str, options: AddTaskOptions | None = None) -> list[str]:
    """Arguments for ``task add``."""
    return ["add", description, *_attribute_args(options or AddTaskOptions())]


def build_complete_args(task_id: int) -> list[str]:
    return [str(task_id), "done"]


def build_delete_args(task_id: int) -> list[str]:
    return [CONFIRMATION_OFF, str(task_id), "delete"]


def build_modify_args(task_id: int, updates: ModifyTaskOptions) -> list[str]:
    """Arguments for ``task <id> modify``; the new description goes last."""
    args = [str(task_id), "modify", *_attribute_args(updates)]
    if updates.description:
        args.append(updates.description)
    return args


def build_get_args() -> list[str]:
    # Full export: completed records lose their working-set id, so no id filter
    return ["export"]


def parse_export(output: str) -> list[Task]:
    """Parse ``task export`` output into tasks.

    Raises:
        TaskParseError: If the output is not a JSON array of records.
    """
    if not output.strip():
        return []
    try:
        data = json.loads(output)
    except json.JSONDecodeError as e:
        raise TaskParseError(f"Failed to parse task export: {e}") from e
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise TaskParseError("Failed to parse task export: expected a JSON array of tasks")
    return [Task.from_dict(item) for item in data]


def parse_created_id(output: str) -> int:
    """Extract the new task id from the ``task add`` confirmation text."""
    match = _CREATED_RE.search(output)
    if not match:
        raise TaskParseError("Failed to parse task ID", details={"output": output.strip()})
    return int(match.group(1))


def find_task(tasks: list[Task], task_id: int) -> Task:
    """Resolve ``task_id`` against a full export.

    Exact id match first. Failing that, and only while the export holds
    completed records, ``task_id`` is tried as a 1-based position in the
    export. Taskwarrior gives every completed record id 0, so this is the
    only handle left on them; it assumes export order is addition order.
    A positional hit is only accepted if the record has no id of its own.

    Raises:
        TaskNotFoundError: If neither lookup yields a record.
    """
    for task in tasks:
        if task.id == task_id:
            return task

    has_completed = any(task.status == "completed" for task in tasks)
    if has_completed and 1 <= task_id <= len(tasks):
        candidate = tasks[task_id - 1]
        if candidate.id == 0:
            logger.debug("taskwarrior.positional_match", id=task_id, uuid=candidate.uuid)
            return candidate

    raise TaskNotFoundError(task_id)


class Taskwarrior:
    """Runs Taskwarrior commands, one process per operation.

    Args:
        task_data: Data directory exported to the child as TASKDATA.
            None leaves Taskwarrior's own configuration in charge.
        command: The Taskwarrior executable.
    """

    def __init__(
        self,
        task_data: str | Path | None = None,
        command: str = "task",
    ) -> None:
        self.task_data = Path(task_data) if task_data is not None else None
        self.command = command

    @classmethod
    def from_settings(cls, settings: Settings) -> "Taskwarrior":
        return cls(task_data=settings.task_data, command=settings.task_command)

    def _env(self) -> dict[str, str]:
        env = dict(os.environ)
        if self.task_data is not None:
            env[TASKDATA_ENV] = str(self.task_data)
        return env

    def run(self, args: list[str]) -> str:
        """Run ``task`` with ``args`` and return its standard output.

        Raises:
            TaskwarriorError: If the process cannot be started or exits non-zero.
        """
        argv = [self.command, *args]
        logger.debug("taskwarrior.run", argv=argv, task_data=str(self.task_data or ""))

        try:
            proc = subprocess.run(
                argv,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                env=self._env(),
            )
        except OSError as e:
            logger.warning("taskwarrior.start_failed", command=self.command, error=str(e))
            raise TaskwarriorError(f"Taskwarrior error: {e}") from e

        if proc.returncode != 0:
            detail = (
                (proc.stderr or "").strip()
                or (proc.stdout or "").strip()
                or f"command exited with status {proc.returncode}"
            )
            logger.warning(
                "taskwarrior.failed",
                argv=argv,
                return_code=proc.returncode,
                stderr=(proc.stderr or "").strip(),
            )
            raise TaskwarriorError(
                f"Taskwarrior error: {detail}",
                details={"return_code": proc.returncode},
            )

        return proc.stdout or ""

    def list_tasks(self, filter: str | None = None) -> list[Task]:
        """List non-deleted tasks matching an optional filter expression."""
        return parse_export(self.run(build_list_args(filter)))

    def add_task(self, description: str, options: AddTaskOptions | None = None) -> int:
        """Add a task and return the id Taskwarrior assigned to it."""
        output = self.run(build_add_args(description, options))
        task_id = parse_created_id(output)
        logger.info("taskwarrior.added", id=task_id)
        return task_id

    def complete_task(self, task_id: int) -> None:
        self.run(build_complete_args(task_id))

    def delete_task(self, task_id: int) -> None:
        self.run(build_delete_args(task_id))

    def modify_task(self, task_id: int, updates: ModifyTaskOptions) -> None:
        self.run(build_modify_args(task_id, updates))

    def get_task(self, task_id: int) -> Task:
        """Fetch one task by id, including completed tasks.

        Raises:
            TaskNotFoundError: If no record matches.
        """
        tasks = parse_export(self.run(build_get_args()))
        if not tasks:
            raise TaskNotFoundError(task_id)
        return find_task(tasks, task_id)
