"""
Service-layer errors.

Services raise these instead of HTTPException so they stay usable outside a
request. ``main`` registers one handler that renders any ``ServiceError`` as
``{"detail": message}`` with the error's status code.
"""


class ServiceError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(ServiceError):
    status_code = 422


class NotFoundError(ServiceError):
    status_code = 404


class ConflictError(ServiceError):
    status_code = 422


class UnauthorizedError(ServiceError):
    status_code = 401


class StoreError(ServiceError):
    """Any failure reported by the database, including a rolled back transaction."""

    status_code = 500
