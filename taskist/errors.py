"""Error taxonomy shared by the stores, validators and routes.

Every error is terminal for the request and is rendered by the handlers in
``taskist.main`` as ``{"error": message}`` with the class's status code.
"""

from fastapi import status


class TaskistError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(TaskistError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class AuthError(TaskistError):
    status_code = status.HTTP_401_UNAUTHORIZED


class ConflictError(TaskistError):
    status_code = status.HTTP_409_CONFLICT


class NotFoundError(TaskistError):
    status_code = status.HTTP_404_NOT_FOUND
