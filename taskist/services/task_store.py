"""Owner-scoped persistence for tasks.

Every query filters on ``owner_id``. A task that exists but belongs to
someone else is reported exactly like one that does not exist.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from taskist.errors import NotFoundError
from taskist.models.task import Task, TaskStatus
from taskist.validators import TaskChanges, TaskDraft

logger = logging.getLogger(__name__)

TASK_NOT_FOUND = 'Task not found.'

# Largest id an INTEGER PRIMARY KEY can hold; larger values cannot be bound.
MAX_TASK_ID = 2**63 - 1


def derive_status(completed: bool) -> TaskStatus:
    return TaskStatus.COMPLETED if completed else TaskStatus.SCHEDULED


def resolve_completion(changes: TaskChanges) -> tuple[bool | None, TaskStatus | None]:
    """Return the ``(completed, status)`` pair to write for ``changes``.

    An explicitly supplied field always wins; the other one is derived from
    it only when it was not supplied. ``None`` means leave the column alone.
    """
    completed = changes.completed
    status = changes.status

    if completed is not None and status is None:
        status = derive_status(completed)
    elif status is not None and completed is None:
        completed = status is TaskStatus.COMPLETED

    return completed, status


class TaskStore:
    def __init__(self, db: Session) -> None:
        self.db = db

    def _is_storable_id(self, task_id: int) -> bool:
        return 1 <= task_id <= MAX_TASK_ID

    def _owned_query(self, task_id: int, owner_id: int):
        return self.db.query(Task).filter(Task.id == task_id, Task.owner_id == owner_id)

    def list_for_owner(self, owner_id: int) -> list[Task]:
        return self.db.query(Task).filter(Task.owner_id == owner_id).order_by(Task.id.desc()).all()

    def find_owned(self, task_id: int, owner_id: int) -> bool:
        if not self._is_storable_id(task_id):
            return False
        return self._owned_query(task_id, owner_id).with_entities(Task.id).first() is not None

    def create(self, owner_id: int, draft: TaskDraft) -> Task:
        task = Task(
            owner_id=owner_id,
            title=draft.title,
            completed=draft.completed,
            priority=draft.priority.value,
            status=draft.status.value,
            due_date=draft.due_date,
        )

        try:
            self.db.add(task)
            self.db.commit()
            self.db.refresh(task)
        except SQLAlchemyError:
            self.db.rollback()
            raise

        logger.debug('Created task %s for owner %s', task.id, owner_id)
        return task

    def update(self, task_id: int, owner_id: int, changes: TaskChanges) -> Task:
        """Apply ``changes`` to an owned task in a single transaction."""
        if not self._is_storable_id(task_id):
            raise NotFoundError(TASK_NOT_FOUND)

        try:
            task = self._owned_query(task_id, owner_id).first()
            if task is None:
                raise NotFoundError(TASK_NOT_FOUND)

            if changes.title is not None:
                task.title = changes.title

            completed, status = resolve_completion(changes)
            if completed is not None:
                task.completed = completed
            if status is not None:
                task.status = status.value

            if changes.priority is not None:
                task.priority = changes.priority.value

            if changes.touches_due_date:
                task.due_date = changes.due_date

            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

        logger.debug('Updated task %s for owner %s', task_id, owner_id)
        return task

    def delete(self, task_id: int, owner_id: int) -> int:
        if not self._is_storable_id(task_id):
            return 0

        try:
            changed = self._owned_query(task_id, owner_id).delete(synchronize_session=False)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

        logger.debug('Deleted %s task(s) with id %s for owner %s', changed, task_id, owner_id)
        return changed
