"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger
from obligation_reminders.domain.models import SweepSummary


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = "obligation-reminders"


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_sweep(request_id: str, summary: SweepSummary, duration_ms: float) -> None:
    """Log structured sweep outcome for operators"""
    logging.info(
        "Reminder sweep completed",
        extra={
            "request_id": request_id,
            "step": "sweep_complete",
            "kinds": [kind.value for kind in summary.kinds],
            "obligations_checked": summary.obligations_checked,
            "notifications_created": summary.notifications_created,
            "duplicates_skipped": summary.duplicates_skipped,
            "write_failures": summary.write_failures,
            "duration_ms": duration_ms,
        },
    )
