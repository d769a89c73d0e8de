"""Error types and JSON error envelopes.

Every error leaves the API as ``{"errors": {field: [message, ...]}}``.
Authentication and lookup failures use the ``message`` key.
"""

from typing import Any, Dict, Iterable, List

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

ErrorMap = Dict[str, List[str]]

UNAUTHORIZED_MESSAGE = "unathorized"
WRONG_CREDENTIALS_MESSAGE = "Username or password wrong"
NOT_FOUND_MESSAGE = "not found"
USERNAME_TAKEN_MESSAGE = "Username already registered"


class ApiError(HTTPException):
    """HTTP error carrying a structured ``{field: [message]}`` mapping."""

    def __init__(self, status_code: int, errors: ErrorMap, headers=None):
        super().__init__(status_code=status_code, detail=errors, headers=headers)
        self.errors = errors


def validation_error(field: str, message: str) -> ApiError:
    """Build a 400 error for a single field."""
    return ApiError(status.HTTP_400_BAD_REQUEST, {field: [message]})


def unauthorized() -> ApiError:
    return ApiError(
        status.HTTP_401_UNAUTHORIZED, {"message": [UNAUTHORIZED_MESSAGE]}
    )


def wrong_credentials() -> ApiError:
    return ApiError(
        status.HTTP_401_UNAUTHORIZED, {"message": [WRONG_CREDENTIALS_MESSAGE]}
    )


def not_found() -> ApiError:
    return ApiError(status.HTTP_404_NOT_FOUND, {"message": [NOT_FOUND_MESSAGE]})


def _field_name(loc: Iterable[Any]) -> str:
    names = [str(part) for part in loc if isinstance(part, str)]
    # ("body",) alone means the body itself could not be parsed
    if len(names) > 1 and names[0] in ("body", "query", "path", "header"):
        names = names[1:]
    return names[-1] if names else "body"


def _message(field: str, error: Dict[str, Any]) -> str:
    kind = error.get("type", "")
    ctx = error.get("ctx") or {}
    if kind in ("missing", "string_too_short"):
        return f"The {field} field is required."
    if kind == "string_too_long":
        return (
            f"The {field} field must not be greater than "
            f"{ctx.get('max_length')} characters."
        )
    if kind == "string_type":
        return f"The {field} field must be a string."
    if kind in ("int_parsing", "int_type"):
        return f"The {field} field must be an integer."
    if kind == "greater_than_equal":
        return f"The {field} field must be at least {ctx.get('ge')}."
    if kind == "less_than_equal":
        return f"The {field} field must not be greater than {ctx.get('le')}."
    if kind == "value_error" and "email" in str(error.get("msg", "")):
        return f"The {field} field must be a valid email address."
    return f"The {field} field is invalid."


def format_validation_errors(errors: Iterable[Dict[str, Any]]) -> ErrorMap:
    """
    Translate Pydantic error dicts into ``{field: [message, ...]}``.

    Args:
        errors: Items as returned by ``RequestValidationError.errors()``.

    Returns:
        dict: Messages grouped by field name, in input order.
    """
    result: ErrorMap = {}
    for error in errors:
        field = _field_name(error.get("loc", ()))
        message = _message(field, error)
        messages = result.setdefault(field, [])
        if message not in messages:
            messages.append(message)
    return result


async def http_exception_handler(request: Request, exc: HTTPException):
    """Render any HTTP exception inside the ``errors`` envelope."""
    if isinstance(exc.detail, dict):
        errors = exc.detail
    else:
        errors = {"message": [str(exc.detail)]}
    return JSONResponse(
        status_code=exc.status_code,
        content={"errors": errors},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Render request validation failures as 400 field errors."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"errors": format_validation_errors(exc.errors())},
    )
