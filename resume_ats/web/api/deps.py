"""Dependency providers for the API."""

from __future__ import annotations

from fastapi import Request

from ...llm import LLMClient


def get_llm_client(request: Request) -> LLMClient:
    """Access the shared LLM client from app state."""
    return request.app.state.llm_client
