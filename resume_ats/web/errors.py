"""API error helpers and exception handlers."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..domain.errors import (
    FileParseError,
    FileTooLargeError,
    InputValidationError,
    ResumeEditError,
    UnsupportedCharactersError,
    UnsupportedFileTypeError,
)
from ..llm import LLMError
from ..providers.errors import ProviderError

logger = logging.getLogger("resume_ats.web.api")


class APIError(Exception):
    """Application-level API error with status/code mapping."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
            }
        }


def to_api_error(exc: Exception, operation: str) -> APIError:
    """Log *exc* with the failing operation and map it to an :class:`APIError`.

    Caller mistakes become 400s; everything else (backend, parse and
    unexpected failures) is a 500 carrying the exception message.
    """
    if isinstance(exc, APIError):
        return exc

    if isinstance(exc, InputValidationError):
        logger.info("%s rejected: %s", operation, exc)
        if isinstance(exc, FileTooLargeError):
            code = "FILE_TOO_LARGE"
        elif isinstance(exc, UnsupportedFileTypeError):
            code = "UNSUPPORTED_FILE_TYPE"
        elif isinstance(exc, ResumeEditError):
            code = "INVALID_EDIT"
        elif isinstance(exc, UnsupportedCharactersError):
            code = "UNSUPPORTED_CHARACTERS"
        else:
            code = "BAD_REQUEST"
        return APIError(400, code, str(exc))

    if isinstance(exc, FileParseError):
        logger.error("%s failed to parse upload: %s", operation, exc, exc_info=exc.__cause__)
        return APIError(500, "FILE_PARSE_FAILED", str(exc))

    if isinstance(exc, ProviderError):
        logger.error(
            "%s failed: provider=%s status=%s message=%s",
            operation, exc.provider, exc.status_code, exc.message,
        )
        return APIError(500, "PROVIDER_ERROR", exc.message, {"provider": exc.provider})

    if isinstance(exc, LLMError):
        logger.error("%s failed: %s", operation, exc)
        return APIError(500, "LLM_ERROR", str(exc))

    logger.exception("%s failed unexpectedly", operation, exc_info=exc)
    return APIError(500, "INTERNAL_ERROR", str(exc) or f"Failed to {operation}")


async def api_error_handler(_: Request, exc: APIError) -> JSONResponse:
    """Render contract-compliant error response."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    """Normalize FastAPI validation errors to API contract shape."""
    logger.info("Rejected request payload: %s", exc.errors())
    return JSONResponse(
        status_code=400,
        content={
            "error": {
                "code": "BAD_REQUEST",
                "message": "Invalid request payload",
                "details": {"errors": jsonable_encoder(exc.errors())},
            }
        },
    )
