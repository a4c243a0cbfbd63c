"""Task entity -- one card on the three-lane task board."""
from companion.domain.enums import TaskStatus, TaskPriority
from companion.domain.identifiers import generate_id


def _parse_priority(value) -> TaskPriority:
    if isinstance(value, TaskPriority):
        return value
    if value is None or not str(value).strip():
        return TaskPriority.MEDIUM
    wanted = str(value).strip().lower()
    for priority in TaskPriority:
        if priority.value.lower() == wanted:
            return priority
    raise ValueError(f"Unknown task priority: {value!r}")


def _parse_status(value) -> TaskStatus:
    if isinstance(value, TaskStatus):
        return value
    try:
        return TaskStatus(str(value).strip().lower())
    except ValueError:
        raise ValueError(f"Unknown task status: {value!r}")


def _optional_text(value) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class Task:
    """Kanban task. New tasks start in the `todo` lane."""

    def __init__(
        self,
        title: str,
        description: str | None = None,
        priority=TaskPriority.MEDIUM,
        due_date: str | None = None,
        status=TaskStatus.TODO,
        task_id: str | None = None,
    ):
        if not isinstance(title, str) or not title.strip():
            raise ValueError("Task title cannot be empty")

        self._id = task_id or generate_id()
        self._title = title.strip()
        self._description = _optional_text(description)
        self._priority = _parse_priority(priority)
        self._due_date = _optional_text(due_date)
        self._status = _parse_status(status)

    @property
    def id(self) -> str:
        return self._id

    @property
    def title(self) -> str:
        return self._title

    @property
    def description(self) -> str | None:
        return self._description

    @property
    def priority(self) -> TaskPriority:
        return self._priority

    @property
    def due_date(self) -> str | None:
        return self._due_date

    @property
    def status(self) -> TaskStatus:
        return self._status

    def move_to(self, status) -> None:
        """Change lanes. Every other field is left alone."""
        self._status = _parse_status(status)

    def apply_update(self, fields: dict) -> None:
        """Merge a partial update. Raises ValueError on an unknown lane or priority."""
        status = _parse_status(fields["status"]) if "status" in fields else self._status
        priority = _parse_priority(fields["priority"]) if "priority" in fields else self._priority

        if "title" in fields:
            title = _optional_text(fields["title"])
            if title:
                self._title = title
        if "description" in fields:
            self._description = _optional_text(fields["description"])
        if "due_date" in fields:
            self._due_date = _optional_text(fields["due_date"])
        self._status = status
        self._priority = priority

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "title": self._title,
            "description": self._description,
            "priority": self._priority.value,
            "due_date": self._due_date,
            "status": self._status.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        return cls(
            title=data["title"],
            description=data.get("description"),
            priority=data.get("priority"),
            due_date=data.get("due_date", data.get("dueDate")),
            status=data.get("status", TaskStatus.TODO),
            task_id=data.get("id"),
        )
