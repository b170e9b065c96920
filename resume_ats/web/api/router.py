"""Top-level API router."""

from __future__ import annotations

from fastapi import APIRouter

from .endpoints.analyze import router as analyze_router
from .endpoints.edit import router as edit_router
from .endpoints.export import router as export_router
from .endpoints.rewrite import router as rewrite_router

api_router = APIRouter(prefix="/api")
api_router.include_router(analyze_router)
api_router.include_router(rewrite_router)
api_router.include_router(export_router)
api_router.include_router(edit_router)
