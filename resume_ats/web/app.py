"""FastAPI app entrypoint for the Resume ATS web API."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from time import perf_counter
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from .. import __version__
from ..config import LLMConfig, load_config
from ..config_validator import Severity, has_errors, validate_config
from ..llm import LLMClient, select_provider
from ..observability import configure_logging
from .api.router import api_router
from .errors import APIError, api_error_handler, validation_error_handler

logger = logging.getLogger("resume_ats.web.api")


def log_config_issues(config: LLMConfig) -> None:
    issues = validate_config(config)
    for issue in issues:
        log = logger.error if issue.severity is Severity.ERROR else logger.warning
        log("config %s: %s", issue.field, issue.message)
    if has_errors(issues):
        logger.error("Configuration has errors; LLM requests are likely to fail")


def create_app(
    config: Optional[LLMConfig] = None,
    llm_client: Optional[LLMClient] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    *llm_client* wins over *config*; with neither, configuration is read from
    the environment (and ``RESUME_ATS_CONFIG`` if set).
    """
    if llm_client is None:
        llm_client = LLMClient(config or load_config())
    client = llm_client

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        log_config_issues(client.config)
        logger.info(
            "Resume ATS API started: provider=%s",
            select_provider(client.config) or "none",
        )
        yield

    app = FastAPI(title="Resume ATS API", version=__version__, lifespan=lifespan)
    app.state.llm_client = client
    app.include_router(api_router)

    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        start = perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (perf_counter() - start) * 1000
            logger.info(
                "api_request method=%s path=%s status=%s duration_ms=%.2f",
                request.method,
                request.url.path,
                500,
                duration_ms,
            )
            raise

        duration_ms = (perf_counter() - start) * 1000
        logger.info(
            "api_request method=%s path=%s status=%s duration_ms=%.2f",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
        )
        return response

    @app.get("/healthz", tags=["system"])
    async def healthz() -> dict:
        return {"status": "ok"}

    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    return app


def main() -> None:
    """Run development API server."""
    import uvicorn

    configure_logging(verbose=os.getenv("RESUME_ATS_VERBOSE", "").lower() == "true")
    uvicorn.run(
        "resume_ats.web.app:create_app",
        factory=True,
        host=os.getenv("RESUME_ATS_HOST", "127.0.0.1"),
        port=int(os.getenv("RESUME_ATS_PORT", "8000")),
    )
