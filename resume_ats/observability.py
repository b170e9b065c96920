"""Logging setup and per-call LLM attempt tracking."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a single stream handler to the package logger."""
    logger = logging.getLogger("resume_ats")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    return logger


@dataclass
class AttemptEvent:
    """A single backend attempt made while producing one JSON response."""

    timestamp: datetime
    provider: str
    attempt: int
    outcome: str  # "success", "invalid_json", "schema_error", "error", "failover"
    duration_ms: float
    error: Optional[str] = None


@dataclass
class LLMCallObserver:
    """Collects attempt events for one ``generate_json`` call and logs them."""

    label: str = "llm"
    events: List[AttemptEvent] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.logger = logging.getLogger("resume_ats.llm")

    def record(
        self,
        provider: str,
        attempt: int,
        outcome: str,
        duration_ms: float,
        error: Optional[BaseException] = None,
    ) -> AttemptEvent:
        event = AttemptEvent(
            timestamp=datetime.now(),
            provider=provider,
            attempt=attempt,
            outcome=outcome,
            duration_ms=duration_ms,
            error=str(error) if error is not None else None,
        )
        self.events.append(event)

        if outcome == "success":
            self.logger.info(
                "[%s] provider=%s attempt=%d ok (%.2fms)",
                self.label, provider, attempt + 1, duration_ms,
            )
        else:
            self.logger.warning(
                "[%s] provider=%s attempt=%d %s (%.2fms): %s",
                self.label, provider, attempt + 1, outcome, duration_ms, event.error,
            )
        return event

    @property
    def providers_tried(self) -> List[str]:
        return [event.provider for event in self.events]

    def get_stats(self) -> Dict[str, Any]:
        return {
            "attempts": len(self.events),
            "failures": sum(1 for e in self.events if e.outcome != "success"),
            "total_duration_ms": sum(e.duration_ms for e in self.events),
            "providers": sorted(set(self.providers_tried)),
        }
