import logging
from datetime import datetime

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field, StrictBool

from taskist.auth.dependencies import get_current_identity
from taskist.auth.jwt_handler import Identity
from taskist.dependencies import get_task_store
from taskist.errors import NotFoundError
from taskist.services.task_store import TASK_NOT_FOUND, TaskStore
from taskist.validators import validate_new_task, validate_task_changes

logger = logging.getLogger(__name__)

router = APIRouter(tags=['tasks'])


class CreateTaskRequest(BaseModel):
    title: str | None = None
    priority: str | None = None
    status: str | None = None
    due_date: str | None = Field(default=None, alias='dueDate')
    completed: StrictBool | None = None


class UpdateTaskRequest(BaseModel):
    title: str | None = None
    completed: StrictBool | None = None
    priority: str | None = None
    status: str | None = None
    due_date: str | None = Field(default=None, alias='dueDate')


class TaskResponse(BaseModel):
    id: int
    title: str
    completed: bool
    priority: str
    status: str
    due_date: str | None = Field(default=None, serialization_alias='dueDate')
    created_at: datetime | None = Field(default=None, serialization_alias='createdAt')

    class Config:
        from_attributes = True


class SuccessResponse(BaseModel):
    success: bool = True


@router.get('', response_model=list[TaskResponse])
def list_tasks(
    identity: Identity = Depends(get_current_identity),
    store: TaskStore = Depends(get_task_store),
):
    return store.list_for_owner(identity.id)


@router.post('', response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    data: CreateTaskRequest,
    identity: Identity = Depends(get_current_identity),
    store: TaskStore = Depends(get_task_store),
):
    draft = validate_new_task(
        title=data.title,
        priority=data.priority,
        status=data.status,
        due_date=data.due_date,
        completed=data.completed,
    )
    return store.create(identity.id, draft)


@router.put('/{task_id}', response_model=SuccessResponse)
def update_task(
    task_id: int,
    data: UpdateTaskRequest,
    identity: Identity = Depends(get_current_identity),
    store: TaskStore = Depends(get_task_store),
):
    if not store.find_owned(task_id, identity.id):
        raise NotFoundError(TASK_NOT_FOUND)

    changes = validate_task_changes({name: getattr(data, name) for name in data.model_fields_set})
    if changes.is_empty():
        logger.debug('Empty update for task %s', task_id)
        return SuccessResponse()

    store.update(task_id, identity.id, changes)
    return SuccessResponse()


@router.delete('/{task_id}', response_model=SuccessResponse)
def delete_task(
    task_id: int,
    identity: Identity = Depends(get_current_identity),
    store: TaskStore = Depends(get_task_store),
):
    if store.delete(task_id, identity.id) == 0:
        raise NotFoundError(TASK_NOT_FOUND)
    return SuccessResponse()
