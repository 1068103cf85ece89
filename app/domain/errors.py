# app/domain/errors.py
from enum import Enum


class ErrorKind(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    INVALID_REQUEST = "INVALID_REQUEST"
    CONFLICT = "CONFLICT"


class CartServiceError(Exception):
    """
    Bazowy blad domeny, niesie rodzaj bledu (kind),
    warstwa api mapuje kind na status HTTP.
    """

    kind: ErrorKind = ErrorKind.INVALID_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(CartServiceError):
    kind = ErrorKind.NOT_FOUND


class InvalidRequestError(CartServiceError):
    kind = ErrorKind.INVALID_REQUEST


class ConflictError(CartServiceError):
    kind = ErrorKind.CONFLICT
