"""Structured progress events for CV generation runs."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

# Pipeline milestones every run reports, in order.
STAGE_LAUNCH = "launch"
STAGE_CONTENT_PROCESSING = "content_processing"
STAGE_GENERATION = "generation"
STAGE_COMPLETION = "completion"


@dataclass
class PipelineEvent:
    """A single event in a generation run."""

    timestamp: datetime
    event_type: str  # "stage", "render_state", "warning", "error"
    data: Dict[str, Any]
    duration_ms: Optional[float] = None


class PipelineObserver:
    """
    Collects the events of one generation run and mirrors them to logging.

    One observer belongs to one request; the shells decide how (and whether)
    to present the collected events.
    """

    def __init__(self, run_id: Optional[str] = None, verbose: Optional[bool] = None):
        self.events: List[PipelineEvent] = []
        self.logger = logging.getLogger("ats_cv")
        self.run_id = run_id
        self.verbose = verbose
        self._setup_logging()

    def _prefix(self) -> str:
        return f"[{self.run_id}] " if self.run_id else ""

    def _setup_logging(self):
        """Configure logging format and handlers."""
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)
        if self.verbose is not None:
            self.logger.setLevel(logging.INFO if self.verbose else logging.WARNING)

    def _record(self, event_type: str, data: Dict[str, Any], duration_ms: Optional[float] = None) -> PipelineEvent:
        event = PipelineEvent(timestamp=datetime.now(), event_type=event_type, data=data, duration_ms=duration_ms)
        self.events.append(event)
        return event

    def log_stage(self, stage: str, message: str, **data: Any) -> None:
        """
        Log a pipeline milestone.

        Args:
            stage: One of the ``STAGE_*`` constants
            message: Human-readable progress message
            **data: Extra context stored with the event
        """
        self._record("stage", {"stage": stage, "message": message, **data})
        self.logger.info(f"{self._prefix()}{message}")

    def log_render_state(self, state: str, duration_ms: Optional[float] = None) -> None:
        """Log a render engine state transition."""
        self._record("render_state", {"state": state}, duration_ms=duration_ms)
        timing = f" ({duration_ms:.2f}ms)" if duration_ms is not None else ""
        self.logger.debug(f"{self._prefix()}render state -> {state}{timing}")

    def log_warning(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self._record("warning", {"message": message, "context": context or {}})
        self.logger.warning(f"{self._prefix()}{message}")

    def log_error(self, error_type: str, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        """
        Log an error event.

        Args:
            error_type: Error code (e.g. "RENDER_TIMEOUT")
            message: Error message
            context: Additional context about the error
        """
        self._record("error", {"error_type": error_type, "message": message, "context": context or {}})
        self.logger.error(f"{self._prefix()}Error ({error_type}): {message}")

    def stages(self) -> List[str]:
        return [e.data["stage"] for e in self.events if e.event_type == "stage"]

    def render_states(self) -> List[str]:
        return [e.data["state"] for e in self.events if e.event_type == "render_state"]

    def get_run_stats(self) -> Dict[str, Any]:
        """Aggregate statistics for the run."""
        errors = [e for e in self.events if e.event_type == "error"]
        warnings = [e for e in self.events if e.event_type == "warning"]
        return {
            "event_count": len(self.events),
            "stages": self.stages(),
            "errors": len(errors),
            "warnings": len(warnings),
            "render_duration_ms": sum(
                e.duration_ms or 0 for e in self.events if e.event_type == "render_state"
            ),
        }

    def clear(self):
        """Clear all recorded events."""
        self.events.clear()
