"""Run the API with uvicorn.

Usage:
    python -m taskist
"""
import uvicorn

from taskist.core.config import Settings


def main() -> None:
    settings = Settings.from_env()
    uvicorn.run(
        "taskist.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
