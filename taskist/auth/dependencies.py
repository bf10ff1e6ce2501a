from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from taskist.auth import jwt_handler
from taskist.auth.jwt_handler import Identity
from taskist.core.config import Settings
from taskist.dependencies import get_settings
from taskist.errors import AuthError

# auto_error is off so a missing header surfaces as our own 401 rather than a 403.
security = HTTPBearer(auto_error=False)


def get_current_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    settings: Settings = Depends(get_settings),
) -> Identity:
    if credentials is None or not credentials.credentials:
        raise AuthError("Missing token.")

    return jwt_handler.decode_access_token(credentials.credentials, settings)
