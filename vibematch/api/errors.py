from typing import Dict, NoReturn, Type

from fastapi import HTTPException

from vibematch.core import (
    ConflictError,
    NotFoundError,
    TransientError,
    ValidationError,
    VibematchError,
)

_STATUS_BY_ERROR: Dict[Type[VibematchError], int] = {
    ValidationError: 400,
    NotFoundError: 404,
    ConflictError: 409,
    TransientError: 503,
}


def raise_http_error(e: VibematchError) -> NoReturn:
    """Turn a core error into the matching HTTP error response."""
    status_code = 500
    for error_cls, code in _STATUS_BY_ERROR.items():
        if isinstance(e, error_cls):
            status_code = code
            break

    raise HTTPException(
        status_code=status_code,
        detail={
            "error": type(e).__name__,
            "message": str(e),
        },
    )
