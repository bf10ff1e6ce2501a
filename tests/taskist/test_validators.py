import pytest

from taskist.errors import ValidationError
from taskist.models.task import Priority, TaskStatus
from taskist.validators import (
    normalize_email,
    validate_new_task,
    validate_registration,
    validate_task_changes,
    validate_title,
)


def test_normalize_email_trims_and_lowercases() -> None:
    assert normalize_email('  Jane@Example.COM ') == 'jane@example.com'


@pytest.mark.parametrize(
    ('email', 'password', 'field', 'message'),
    [
        ('not-an-email', 'pass', 'email', 'Enter a valid email.'),
        ('', 'pass', 'email', 'Enter a valid email.'),
        ('a@b.com', 'abc', 'password', 'Password must be at least 4 characters.'),
        ('a@b.com', None, 'password', 'Password must be at least 4 characters.'),
    ],
)
def test_validate_registration_rejects_bad_credentials(email, password, field: str, message: str) -> None:
    with pytest.raises(ValidationError) as exception_info:
        validate_registration(email, password)

    assert exception_info.value.field == field
    assert exception_info.value.message == message


def test_validate_title_boundary() -> None:
    with pytest.raises(ValidationError) as exception_info:
        validate_title(' J ')

    assert exception_info.value.field == 'title'
    assert validate_title(' Jo ') == 'Jo'


def test_validate_new_task_applies_defaults() -> None:
    draft = validate_new_task(title='Jane')

    assert draft.title == 'Jane'
    assert draft.priority is Priority.PT
    assert draft.status is TaskStatus.SCHEDULED
    assert draft.completed is False
    assert draft.due_date is None


def test_validate_new_task_derives_completed_from_status() -> None:
    draft = validate_new_task(title='Jane', status='completed')

    assert draft.completed is True


def test_validate_new_task_keeps_explicit_completed() -> None:
    draft = validate_new_task(title='Jane', status='completed', completed=False)

    assert draft.status is TaskStatus.COMPLETED
    assert draft.completed is False


def test_validate_new_task_normalizes_due_date() -> None:
    assert validate_new_task(title='Jane', due_date=' 2026-01-05 ').due_date == '2026-01-05'
    assert validate_new_task(title='Jane', due_date='   ').due_date is None


@pytest.mark.parametrize(
    ('kwargs', 'field', 'message'),
    [
        ({'title': 'J'}, 'title', 'Title must be at least 2 characters.'),
        ({'title': 'Jane', 'priority': 'yoga'}, 'priority', 'Invalid priority value.'),
        ({'title': 'Jane', 'status': 'done'}, 'status', 'Invalid status value.'),
    ],
)
def test_validate_new_task_names_offending_field(kwargs: dict, field: str, message: str) -> None:
    with pytest.raises(ValidationError) as exception_info:
        validate_new_task(**kwargs)

    assert exception_info.value.field == field
    assert exception_info.value.message == message


def test_validate_task_changes_only_includes_supplied_fields() -> None:
    changes = validate_task_changes({'priority': ' cardio '})

    assert changes.priority is Priority.CARDIO
    assert changes.title is None
    assert changes.status is None
    assert changes.completed is None
    assert not changes.touches_due_date


def test_validate_task_changes_treats_null_as_absent() -> None:
    changes = validate_task_changes({'title': None, 'status': None})

    assert changes.is_empty()


def test_validate_task_changes_null_due_date_clears_it() -> None:
    changes = validate_task_changes({'due_date': None})

    assert changes.clears_due_date
    assert changes.touches_due_date
    assert changes.due_date is None


def test_validate_task_changes_reports_first_invalid_field_in_order() -> None:
    with pytest.raises(ValidationError) as exception_info:
        validate_task_changes({'status': 'bogus', 'title': 'x', 'priority': 'bogus'})

    assert exception_info.value.field == 'title'
