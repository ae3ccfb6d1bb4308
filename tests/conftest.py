"""Shared test fixtures and utilities for taskwarrior-mcp tests.

Provides:
- FakeRunner: stand-in for subprocess.run that records argv/env
- FakeTaskwarrior: in-memory wrapper for dispatcher tests
- Settings fixtures isolated from the real environment
"""

import os
import subprocess
from pathlib import Path
from typing import Any, Generator
from unittest.mock import patch

import pytest

from taskwarrior_mcp.config import Settings, reload_settings, set_settings
from taskwarrior_mcp.errors import TaskNotFoundError, TaskwarriorError
from taskwarrior_mcp.models import AddTaskOptions, ModifyTaskOptions, Task
from taskwarrior_mcp.taskwarrior import Taskwarrior


class FakeRunner:
    """Replaces subprocess.run, returning canned results in order.

    Each queued response is (returncode, stdout, stderr) or an exception
    instance to raise.
    """

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self._responses: list[Any] = []

    def queue(self, stdout: str = "", returncode: int = 0, stderr: str = "") -> None:
        self._responses.append((returncode, stdout, stderr))

    def queue_error(self, exc: BaseException) -> None:
        self._responses.append(exc)

    @property
    def last_argv(self) -> list[str]:
        return self.calls[-1]["argv"]

    @property
    def last_env(self) -> dict[str, str]:
        return self.calls[-1]["env"]

    def __call__(self, argv, **kwargs) -> subprocess.CompletedProcess:
        self.calls.append({"argv": list(argv), **kwargs})
        response = self._responses.pop(0) if self._responses else (0, "", "")
        if isinstance(response, BaseException):
            raise response
        returncode, stdout, stderr = response
        return subprocess.CompletedProcess(argv, returncode, stdout, stderr)


@pytest.fixture
def fake_run() -> Generator[FakeRunner, None, None]:
    """Patch subprocess.run inside the command wrapper."""
    runner = FakeRunner()
    with patch("taskwarrior_mcp.taskwarrior.subprocess.run", runner):
        yield runner


class FakeTaskwarrior(Taskwarrior):
    """In-memory Taskwarrior used for dispatcher and server tests.

    Ids are assigned 1, 2, 3... like a fresh Taskwarrior data directory.
    Nothing here reaches a real process.
    """

    def __init__(self) -> None:
        super().__init__(task_data=None, command="task")
        self.tasks: dict[int, Task] = {}
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.fail_with: Exception | None = None

    def run(self, args: list[str]) -> str:
        raise AssertionError("FakeTaskwarrior must not spawn processes")

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))
        if self.fail_with is not None:
            raise self.fail_with

    def list_tasks(self, filter: str | None = None) -> list[Task]:
        self._record("list_tasks", filter)
        tasks = list(self.tasks.values())
        if filter and filter.startswith("project:"):
            project = filter.split(":", 1)[1]
            tasks = [t for t in tasks if t.project == project]
        return tasks

    def add_task(self, description: str, options: AddTaskOptions | None = None) -> int:
        self._record("add_task", description, options)
        options = options or AddTaskOptions()
        task_id = len(self.tasks) + 1
        self.tasks[task_id] = Task(
            id=task_id,
            description=description,
            status="pending",
            due=options.due,
            priority=options.priority,
            project=options.project,
            tags=list(options.tags),
        )
        return task_id

    def complete_task(self, task_id: int) -> None:
        self._record("complete_task", task_id)
        self._existing(task_id).status = "completed"

    def delete_task(self, task_id: int) -> None:
        self._record("delete_task", task_id)
        self._existing(task_id).status = "deleted"

    def modify_task(self, task_id: int, updates: ModifyTaskOptions) -> None:
        self._record("modify_task", task_id, updates)
        task = self._existing(task_id)
        for name in ("description", "due", "priority", "project"):
            value = getattr(updates, name)
            if value:
                setattr(task, name, value)
        task.tags.extend(t for t in updates.tags if t not in task.tags)

    def get_task(self, task_id: int) -> Task:
        self._record("get_task", task_id)
        if task_id not in self.tasks:
            raise TaskNotFoundError(task_id)
        return self.tasks[task_id]

    def _existing(self, task_id: int) -> Task:
        if task_id not in self.tasks:
            raise TaskwarriorError(f"Taskwarrior error: No tasks specified for id {task_id}.")
        return self.tasks[task_id]


@pytest.fixture
def fake_taskwarrior() -> FakeTaskwarrior:
    return FakeTaskwarrior()


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    """Run with no TASKWARRIOR_MCP_* variables set."""
    env = {k: v for k, v in os.environ.items() if not k.startswith("TASKWARRIOR_MCP_")}
    with patch.dict(os.environ, env, clear=True):
        yield


@pytest.fixture
def settings(tmp_path: Path, clean_env) -> Generator[Settings, None, None]:
    """Settings pointing Taskwarrior at a temporary data directory."""
    settings = Settings(_env_file=None, task_data=tmp_path / "taskdata")
    set_settings(settings)
    yield settings
    reload_settings()
