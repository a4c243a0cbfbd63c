"""Milestone entity -- a long-term goal with percentage progress."""
from companion.domain.identifiers import generate_id
from companion.domain.invariant import coerce_int, sanitize_progress, MAX_PROGRESS


def _optional_text(value) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class Milestone:
    """Goal on the timeline. Progress stays within 0..100."""

    PROGRESS_STEP = 5

    def __init__(
        self,
        name: str,
        description: str | None = None,
        target_date: str | None = None,
        progress=0,
        milestone_id: str | None = None,
    ):
        if not isinstance(name, str) or not name.strip():
            raise ValueError("Milestone name cannot be empty")

        self._id = milestone_id or generate_id()
        self._name = name.strip()
        self._description = _optional_text(description)
        self._target_date = _optional_text(target_date)
        self._progress = sanitize_progress(progress)

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str | None:
        return self._description

    @property
    def target_date(self) -> str | None:
        return self._target_date

    @property
    def progress(self) -> int:
        return self._progress

    @property
    def is_complete(self) -> bool:
        return self._progress >= MAX_PROGRESS

    def advance(self, step: int = PROGRESS_STEP) -> int:
        """Bump progress by a fixed step, capped at 100. Returns the new value."""
        self._progress = sanitize_progress(self._progress + step)
        return self._progress

    def apply_update(self, fields: dict) -> None:
        if "name" in fields:
            name = _optional_text(fields["name"])
            if name:
                self._name = name
        if "description" in fields:
            self._description = _optional_text(fields["description"])
        if "target_date" in fields:
            self._target_date = _optional_text(fields["target_date"])
        if "progress" in fields and coerce_int(fields["progress"]) is not None:
            self._progress = sanitize_progress(fields["progress"])

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "name": self._name,
            "description": self._description,
            "target_date": self._target_date,
            "progress": self._progress,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Milestone":
        return cls(
            name=data["name"],
            description=data.get("description"),
            target_date=data.get("target_date", data.get("targetDate")),
            progress=data.get("progress", 0),
            milestone_id=data.get("id"),
        )
