"""Data types exchanged with Taskwarrior.

Task is a read-only view of one record from ``task export``. The option
classes are the transient inputs of add/modify; they are consumed into
command-line tokens and never stored.
"""

from dataclasses import dataclass, field
from typing import Any

# Keys of an export record that Task models explicitly. Everything else
# (annotations, UDAs, depends, wait, ...) is carried in Task.extra.
_KNOWN_FIELDS = (
    "id",
    "uuid",
    "description",
    "status",
    "due",
    "priority",
    "project",
    "tags",
    "entry",
    "modified",
    "end",
    "urgency",
)


@dataclass
class Task:
    """A single Taskwarrior record as exported by ``task export``.

    ``id`` is 0 for completed and deleted records: Taskwarrior only keeps
    working-set identifiers for pending and waiting tasks.
    """

    description: str
    id: int = 0
    uuid: str | None = None
    status: str | None = None
    due: str | None = None
    priority: str | None = None
    project: str | None = None
    tags: list[str] = field(default_factory=list)
    entry: str | None = None
    modified: str | None = None
    end: str | None = None
    urgency: float | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Serialize in export order, omitting unset fields."""
        data: dict[str, Any] = {}
        for key in _KNOWN_FIELDS:
            value = getattr(self, key)
            if value is None or (key == "tags" and not value):
                continue
            data[key] = value
        data.update(self.extra)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Task":
        return cls(
            description=data.get("description", ""),
            id=data.get("id", 0) or 0,
            uuid=data.get("uuid"),
            status=data.get("status"),
            due=data.get("due"),
            priority=data.get("priority"),
            project=data.get("project"),
            tags=list(data.get("tags") or []),
            entry=data.get("entry"),
            modified=data.get("modified"),
            end=data.get("end"),
            urgency=data.get("urgency"),
            extra={k: v for k, v in data.items() if k not in _KNOWN_FIELDS},
        )


@dataclass
class AddTaskOptions:
    """Optional attributes for a new task."""

    due: str | None = None
    priority: str | None = None
    project: str | None = None
    tags: list[str] = field(default_factory=list)


@dataclass
class ModifyTaskOptions(AddTaskOptions):
    """Attributes to change on an existing task. Unset fields are left alone."""

    description: str | None = None
