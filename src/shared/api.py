"""HTTP plumbing shared by every router: error mapping and the admin guard."""

import secrets

from fastapi import FastAPI, Header, Request
from fastapi.responses import JSONResponse
from protean.exceptions import (
    DatabaseError,
    ExpectedVersionError,
    InvalidOperationError,
    InvalidStateError,
    ObjectNotFoundError,
    ProteanException,
    TransactionError,
    ValidationError,
)

from shared.exceptions import InvalidCredentialsError, UnauthenticatedError
from shared.logging import get_logger

logger = get_logger(__name__)

# Most specific first; the first matching class wins
_STATUS_CODES = (
    (ValidationError, 400),
    (InvalidCredentialsError, 401),
    (UnauthenticatedError, 401),
    (ObjectNotFoundError, 404),
    (ExpectedVersionError, 409),
    (InvalidStateError, 409),
    (InvalidOperationError, 422),
    (DatabaseError, 500),
    (TransactionError, 500),
)

_STALE_MESSAGE = "Record was modified by someone else, reload and try again"


def status_code_for(exc: ProteanException) -> int:
    for cls, status_code in _STATUS_CODES:
        if isinstance(exc, cls):
            return status_code
    return 400


def error_message(exc: ProteanException) -> str:
    """A single human-readable message for ``exc``."""
    if isinstance(exc, ValidationError):
        messages = exc.messages
        if isinstance(messages, dict):
            first = next(iter(messages.values()), [])
            if isinstance(first, (list, tuple)):
                return str(first[0]) if first else "Validation failed"
            return str(first)
        if isinstance(messages, (list, tuple)):
            return str(messages[0]) if messages else "Validation failed"
        return str(messages)
    if isinstance(exc, ExpectedVersionError):
        return _STALE_MESSAGE
    if isinstance(exc, (DatabaseError, TransactionError)):
        return "Storage failure"
    return str(exc.args[0]) if exc.args else "Request failed"


def register_exception_handlers(app: FastAPI) -> None:
    """Translate protean and shop errors into JSON error responses."""

    @app.exception_handler(ProteanException)
    async def handle_domain_error(request: Request, exc: ProteanException):
        status_code = status_code_for(exc)
        content = {"error": error_message(exc)}
        if isinstance(exc, ValidationError) and isinstance(exc.messages, dict):
            content["messages"] = exc.messages

        if status_code >= 500:
            logger.error("Request failed", path=request.url.path, error=str(exc))
        else:
            logger.info("Request rejected", path=request.url.path, status_code=status_code, error=content["error"])
        return JSONResponse(status_code=status_code, content=content)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception("Unhandled server error", path=request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


def require_admin(request: Request, x_admin_token: str | None = Header(None)) -> None:
    """Guard for admin routes; a no-op unless ``admin_token`` is configured."""
    expected = request.app.state.settings.admin_token
    if expected and not secrets.compare_digest(x_admin_token or "", expected):
        raise UnauthenticatedError("Admin access required")
