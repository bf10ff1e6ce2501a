"""Field-level checks applied before any store mutation.

The functions here are pure: they take raw request values and either return
normalized, typed values or raise :class:`taskist.errors.ValidationError`
naming the offending field.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from taskist.errors import ValidationError
from taskist.models.task import Priority, TaskStatus

MIN_TITLE_LENGTH = 2
MIN_PASSWORD_LENGTH = 4

# Order in which the fields of a partial update are checked.
UPDATE_FIELD_ORDER = ('title', 'completed', 'priority', 'status', 'due_date')


@dataclass(frozen=True)
class TaskDraft:
    title: str
    completed: bool
    priority: Priority
    status: TaskStatus
    due_date: str | None = None


@dataclass(frozen=True)
class TaskChanges:
    """A validated partial update. ``None`` means the field was not supplied,
    except for ``due_date`` where ``clears_due_date`` tells the two apart."""

    title: str | None = None
    completed: bool | None = None
    priority: Priority | None = None
    status: TaskStatus | None = None
    due_date: str | None = None
    clears_due_date: bool = False

    @property
    def touches_due_date(self) -> bool:
        return self.due_date is not None or self.clears_due_date

    def is_empty(self) -> bool:
        return (
            self.title is None
            and self.completed is None
            and self.priority is None
            and self.status is None
            and not self.touches_due_date
        )


def normalize_email(email: str | None) -> str:
    return (email or '').strip().lower()


def validate_registration(email: str | None, password: str | None) -> tuple[str, str]:
    normalized = normalize_email(email)
    password = password or ''

    if '@' not in normalized:
        raise ValidationError('Enter a valid email.', field='email')
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f'Password must be at least {MIN_PASSWORD_LENGTH} characters.',
            field='password',
        )

    return normalized, password


def validate_title(value: str | None) -> str:
    normalized = (value or '').strip()
    if len(normalized) < MIN_TITLE_LENGTH:
        raise ValidationError(f'Title must be at least {MIN_TITLE_LENGTH} characters.', field='title')
    return normalized


def parse_priority(value: str | None) -> Priority:
    try:
        return Priority((value or '').strip())
    except ValueError as exc:
        raise ValidationError('Invalid priority value.', field='priority') from exc


def parse_status(value: str | None) -> TaskStatus:
    try:
        return TaskStatus((value or '').strip())
    except ValueError as exc:
        raise ValidationError('Invalid status value.', field='status') from exc


def validate_completed(value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValidationError('Completed must be true or false.', field='completed')
    return value


def normalize_due_date(value: str | None) -> str | None:
    if value is None:
        return None
    normalized = str(value).strip()
    return normalized or None


def validate_new_task(
    title: str | None,
    priority: str | None = None,
    status: str | None = None,
    due_date: str | None = None,
    completed: bool | None = None,
) -> TaskDraft:
    normalized_title = validate_title(title)
    normalized_priority = parse_priority(priority or Priority.PT.value)
    normalized_status = parse_status(status or TaskStatus.SCHEDULED.value)

    if completed is None:
        normalized_completed = normalized_status is TaskStatus.COMPLETED
    else:
        normalized_completed = validate_completed(completed)

    return TaskDraft(
        title=normalized_title,
        completed=normalized_completed,
        priority=normalized_priority,
        status=normalized_status,
        due_date=normalize_due_date(due_date),
    )


def validate_task_changes(fields: Mapping[str, Any]) -> TaskChanges:
    """Validate the supplied subset of task fields.

    ``fields`` holds only the keys present in the request. ``None`` for any
    key other than ``due_date`` is treated as absent. The first invalid field,
    in ``UPDATE_FIELD_ORDER``, raises.
    """
    changes: dict[str, Any] = {}

    for name in UPDATE_FIELD_ORDER:
        if name not in fields:
            continue
        value = fields[name]

        if name == 'due_date':
            normalized_due_date = normalize_due_date(value)
            changes['due_date'] = normalized_due_date
            changes['clears_due_date'] = normalized_due_date is None
            continue

        if value is None:
            continue

        if name == 'title':
            changes['title'] = validate_title(value)
        elif name == 'completed':
            changes['completed'] = validate_completed(value)
        elif name == 'priority':
            changes['priority'] = parse_priority(value)
        elif name == 'status':
            changes['status'] = parse_status(value)

    return TaskChanges(**changes)
