# app/core/errors.py
"""
Typed failures raised by the stores, the queue dispatcher and the report
lifecycle. The HTTP layer maps them to responses through ``status_code``.
"""


class AppError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(AppError):
    status_code = 404


class IllegalTransitionError(AppError):
    status_code = 409


class ForbiddenError(AppError):
    status_code = 403


class ConflictError(AppError):
    status_code = 409


class StoreFailureError(AppError):
    status_code = 503


__all__ = [
    "AppError",
    "NotFoundError",
    "IllegalTransitionError",
    "ForbiddenError",
    "ConflictError",
    "StoreFailureError",
]
