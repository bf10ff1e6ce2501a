import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()

DEFAULT_JWT_SECRET_KEY = "dev-fallback"
DEFAULT_DATABASE_URL = "sqlite:///./data/tasks.db"
DEFAULT_ALLOWED_ORIGINS = (
    "http://localhost:5173",
    "https://yourtaskist.com",
    "https://www.yourtaskist.com",
)


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int(value: str | None, default: int) -> int:
    if value is None or not value.strip():
        return default
    return int(value)


@dataclass(frozen=True)
class Settings:
    app_env: str = "development"
    database_url: str = DEFAULT_DATABASE_URL
    database_echo: bool = False

    jwt_secret_key: str = DEFAULT_JWT_SECRET_KEY
    jwt_algorithm: str = "HS256"
    jwt_expires_minutes: int = 120

    bcrypt_rounds: int = 10

    allowed_origins: tuple[str, ...] = DEFAULT_ALLOWED_ORIGINS
    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 3001

    @classmethod
    def from_env(cls) -> "Settings":
        client_url = os.getenv("CLIENT_URL", "").strip()
        origins = DEFAULT_ALLOWED_ORIGINS + ((client_url,) if client_url else ())

        return cls(
            app_env=os.getenv("APP_ENV", "development"),
            database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
            database_echo=_get_bool(os.getenv("DATABASE_ECHO"), default=False),
            jwt_secret_key=os.getenv("JWT_SECRET_KEY", DEFAULT_JWT_SECRET_KEY),
            jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
            jwt_expires_minutes=_get_int(os.getenv("JWT_EXPIRES_MINUTES"), 120),
            bcrypt_rounds=_get_int(os.getenv("BCRYPT_ROUNDS"), 10),
            allowed_origins=origins,
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            host=os.getenv("HOST", "0.0.0.0"),
            port=_get_int(os.getenv("PORT"), 3001),
        )

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == "production"


def validate_runtime_config(settings: Settings) -> None:
    if settings.is_production and settings.jwt_secret_key == DEFAULT_JWT_SECRET_KEY:
        raise RuntimeError("JWT_SECRET_KEY must be set in production.")
    if not 4 <= settings.bcrypt_rounds <= 31:
        raise RuntimeError("BCRYPT_ROUNDS must be between 4 and 31.")
