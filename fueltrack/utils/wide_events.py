"""
Wide Events (Canonical Log Lines) - Structured Logging Utility

Emit ONE structured JSON event per operation (import, dashboard
aggregation) carrying its counts, timings and outcome, instead of many
scattered log lines.
"""

import time
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import structlog

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer(),
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class WideEvent:
    """
    Accumulates context throughout an operation, then emits one log event.

    Usage:
        event = WideEvent("records_import")
        event.add_business_metric("imported", 3)

        with event.timer("db_write"):
            store.replace_all(records)

        event.mark_success()
        event.emit()
    """

    def __init__(self, operation: str, request_id: Optional[str] = None):
        self.operation = operation
        self.context: Dict[str, Any] = {
            "operation": operation,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "start_time": time.time(),
            "request_id": request_id or str(uuid.uuid4()),
        }
        self.logger = structlog.get_logger("fueltrack.events")

    def add_context(self, **kwargs) -> "WideEvent":
        """Add context fields (window, language, record_id, etc.)."""
        self.context.update(kwargs)
        return self

    def add_business_metric(self, key: str, value: Any) -> "WideEvent":
        """Add business metrics (records imported, total cost, etc.)."""
        self.context.setdefault("business_metrics", {})[key] = value
        return self

    def add_error(self, error: Exception, **kwargs) -> "WideEvent":
        """Add error details to the event."""
        self.context["error"] = {
            "type": type(error).__name__,
            "message": str(error),
            "details": kwargs,
        }
        self.context["success"] = False
        return self

    def mark_success(self) -> "WideEvent":
        self.context["success"] = True
        return self

    def mark_failure(self, reason: str) -> "WideEvent":
        self.context["success"] = False
        self.context["failure_reason"] = reason
        return self

    @contextmanager
    def timer(self, operation_name: str):
        """
        Time a step of the operation.

        Outputs: {"performance_breakdown": {"derive_ms": 0.4}}
        """
        start = time.time()
        try:
            yield
        finally:
            duration_ms = (time.time() - start) * 1000
            breakdown = self.context.setdefault("performance_breakdown", {})
            breakdown[f"{operation_name}_ms"] = round(duration_ms, 2)

    def set_duration(self) -> "WideEvent":
        """Calculate and set the duration of the operation."""
        if "start_time" in self.context:
            duration_ms = (time.time() - self.context["start_time"]) * 1000
            self.context["duration_ms"] = round(duration_ms, 2)
            del self.context["start_time"]
        return self

    def emit(self, level: str = "info") -> None:
        """Emit the event as a single log line."""
        self.set_duration()
        log_method = getattr(self.logger, level, self.logger.info)
        log_method(f"{self.operation}_complete", **self.context)


@contextmanager
def track_operation(operation: str, **initial_context):
    """
    Context manager for tracking an operation with a wide event.

    Usage:
        with track_operation("records_import", payload_size=10) as event:
            event.add_business_metric("imported", 7)
            # Event emits automatically on exit
    """
    event = WideEvent(operation)
    event.add_context(**initial_context)

    try:
        yield event
        event.mark_success()
    except Exception as e:
        event.add_error(e)
        event.mark_failure(str(e))
        raise
    finally:
        event.emit(level="error" if not event.context.get("success", True) else "info")
