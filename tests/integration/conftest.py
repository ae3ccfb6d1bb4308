"""Shared fixtures for integration tests against a real Taskwarrior.

Provides:
- taskwarrior: wrapper bound to an empty temporary data directory
- dispatcher: Dispatcher over that wrapper

Tests are skipped when `task` is not on PATH. Every test gets its own
TASKDATA and an empty TASKRC, so the user's own task database and
configuration are never touched.
"""

import shutil
from pathlib import Path

import pytest

from taskwarrior_mcp.dispatcher import Dispatcher
from taskwarrior_mcp.taskwarrior import Taskwarrior

TASK_BINARY = shutil.which("task")


@pytest.fixture
def task_data(tmp_path: Path) -> Path:
    data = tmp_path / "taskdata"
    data.mkdir()
    return data


@pytest.fixture
def taskwarrior(task_data: Path, tmp_path: Path, monkeypatch) -> Taskwarrior:
    if TASK_BINARY is None:
        pytest.skip("Taskwarrior `task` not on PATH")
    taskrc = tmp_path / "taskrc"
    taskrc.write_text("")
    monkeypatch.setenv("TASKRC", str(taskrc))
    return Taskwarrior(task_data=task_data, command=TASK_BINARY)


@pytest.fixture
def dispatcher(taskwarrior: Taskwarrior) -> Dispatcher:
    return Dispatcher(taskwarrior)
