# app/api/__init__.py
from fastapi import HTTPException

from app.domain.errors import CartServiceError, ErrorKind

_STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INVALID_REQUEST: 400,
    ErrorKind.CONFLICT: 409,
}


def to_http(error: CartServiceError) -> HTTPException:
    return HTTPException(status_code=_STATUS_BY_KIND[error.kind], detail=error.message)
