from collections.abc import Iterator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from taskist.core.config import Settings
from taskist.services.credential_store import CredentialStore
from taskist.services.task_store import TaskStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db(request: Request) -> Iterator[Session]:
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_credential_store(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> CredentialStore:
    return CredentialStore(db, bcrypt_rounds=settings.bcrypt_rounds)


def get_task_store(db: Session = Depends(get_db)) -> TaskStore:
    return TaskStore(db)
