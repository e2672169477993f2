"""Record and Classification data models."""

from __future__ import annotations

from dataclasses import dataclass

PRINCIPAL = "principal"
DELEGATE = "delegate"
RELAY = "relay"
OTHER = "other"

# Categories that can be persisted. OTHER speakers are never recorded.
SPEAKER_CATEGORIES: tuple[str, ...] = (PRINCIPAL, DELEGATE, RELAY)

ROLE_LABELS: dict[str, str] = {
    PRINCIPAL: "Chairman",
    DELEGATE: "Delegate",
    RELAY: "Relay",
    OTHER: "Other",
}

STATEMENT = "statement"
TASK = "task"
RECORD_KINDS: tuple[str, ...] = (STATEMENT, TASK)

HIGH = "high"
NORMAL = "normal"
LOW = "low"
PRIORITIES: tuple[str, ...] = (HIGH, NORMAL, LOW)


def _check_task_fields(kind: str, description: str | None, priority: str | None) -> None:
    """Raise ValueError unless the task/statement field invariant holds."""
    if kind not in RECORD_KINDS:
        raise ValueError(f"record kind must be one of {RECORD_KINDS}, got {kind!r}")
    if kind == TASK:
        if description is None or priority is None:
            raise ValueError("task records need both a description and a priority")
        if priority not in PRIORITIES:
            raise ValueError(f"priority must be one of {PRIORITIES}, got {priority!r}")
    elif description is not None or priority is not None:
        raise ValueError("statement records carry no description or priority")


@dataclass(frozen=True)
class Classification:
    """Result of task extraction for one message.

    Attributes:
        kind: ``"statement"`` or ``"task"``.
        description: Task description; ``None`` for statements.
        priority: ``"high"``, ``"normal"`` or ``"low"``; ``None`` for statements.
    """

    kind: str
    description: str | None = None
    priority: str | None = None

    def __post_init__(self) -> None:
        _check_task_fields(self.kind, self.description, self.priority)

    @classmethod
    def statement(cls) -> Classification:
        return cls(kind=STATEMENT)

    @classmethod
    def task(cls, description: str, priority: str) -> Classification:
        return cls(kind=TASK, description=description, priority=priority)

    @property
    def is_task(self) -> bool:
        return self.kind == TASK


@dataclass
class Record:
    """One captured message.

    Attributes:
        group_id: Conversation scope the message was posted in.
        speaker_name: Display name at classification time.
        speaker_category: ``"principal"``, ``"delegate"`` or ``"relay"``.
        message_content: Raw message text.
        record_kind: ``"statement"`` or ``"task"``.
        task_description: Present only for tasks.
        priority: Present only for tasks.
        speaker_role: Human-readable label; derived from the category.
        id: Row id, assigned by the store.
        created_at: ISO 8601 UTC timestamp, assigned by the store.
    """

    group_id: str
    speaker_name: str
    speaker_category: str
    message_content: str
    record_kind: str
    task_description: str | None = None
    priority: str | None = None
    speaker_role: str = ""
    id: int | None = None
    created_at: str = ""

    def __post_init__(self) -> None:
        if self.speaker_category not in SPEAKER_CATEGORIES:
            raise ValueError(
                f"speaker category must be one of {SPEAKER_CATEGORIES}, "
                f"got {self.speaker_category!r}"
            )
        expected_role = ROLE_LABELS[self.speaker_category]
        if not self.speaker_role:
            self.speaker_role = expected_role
        elif self.speaker_role != expected_role:
            raise ValueError(
                f"role label {self.speaker_role!r} does not match category "
                f"{self.speaker_category!r}"
            )
        _check_task_fields(self.record_kind, self.task_description, self.priority)

    @classmethod
    def from_classification(
        cls,
        *,
        group_id: str,
        speaker_name: str,
        speaker_category: str,
        message_content: str,
        classification: Classification,
    ) -> Record:
        """Build an unsaved record from an extraction result."""
        return cls(
            group_id=group_id,
            speaker_name=speaker_name,
            speaker_category=speaker_category,
            message_content=message_content,
            record_kind=classification.kind,
            task_description=classification.description,
            priority=classification.priority,
        )

    @property
    def is_task(self) -> bool:
        return self.record_kind == TASK

    # -- Serialization ---------------------------------------------------------

    def to_row(self) -> tuple:
        """Serialize to the insert column order (id is assigned by SQLite)."""
        return (
            self.group_id,
            self.speaker_name,
            self.speaker_category,
            self.speaker_role,
            self.message_content,
            self.record_kind,
            self.task_description,
            self.priority,
            self.created_at,
        )

    @classmethod
    def from_row(cls, row: tuple) -> Record:
        """Deserialize from a ``SELECT *`` row tuple."""
        return cls(
            id=row[0],
            group_id=row[1],
            speaker_name=row[2],
            speaker_category=row[3],
            speaker_role=row[4],
            message_content=row[5],
            record_kind=row[6],
            task_description=row[7],
            priority=row[8],
            created_at=row[9],
        )
