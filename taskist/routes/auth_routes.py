from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from taskist.auth import jwt_handler
from taskist.core.config import Settings
from taskist.dependencies import get_credential_store, get_settings
from taskist.services.credential_store import CredentialStore
from taskist.validators import normalize_email

router = APIRouter(tags=["auth"])


class CredentialsRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class TokenResponse(BaseModel):
    token: str


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(
    data: CredentialsRequest,
    store: CredentialStore = Depends(get_credential_store),
    settings: Settings = Depends(get_settings),
):
    user_id = store.register(data.email, data.password)
    email = normalize_email(data.email)
    return TokenResponse(token=jwt_handler.create_access_token(user_id, email, settings))


@router.post("/login", response_model=TokenResponse)
def login(
    data: CredentialsRequest,
    store: CredentialStore = Depends(get_credential_store),
    settings: Settings = Depends(get_settings),
):
    user_id = store.verify(data.email, data.password)
    email = normalize_email(data.email)
    return TokenResponse(token=jwt_handler.create_access_token(user_id, email, settings))
