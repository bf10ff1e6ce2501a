from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from taskist.core.config import Settings
from taskist.errors import AuthError


@dataclass(frozen=True)
class Identity:
    id: int
    email: str


def create_access_token(
    user_id: int,
    email: str,
    settings: Settings,
    expires_minutes: int | None = None,
) -> str:
    expire_minutes = settings.jwt_expires_minutes if expires_minutes is None else expires_minutes
    issued_at = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "email": email,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=expire_minutes),
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> Identity:
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp", "iat"]},
        )
        return Identity(id=int(payload["sub"]), email=str(payload.get("email", "")))
    except (jwt.PyJWTError, KeyError, TypeError, ValueError) as exc:
        raise AuthError("Invalid or expired token.") from exc
