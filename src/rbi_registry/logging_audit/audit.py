"""Audit trail functionality for RBI Registry.

This module provides structured audit logging for tracking roster ingestion,
classification runs and statistics reports.
"""

import time
import uuid
from typing import Any, Dict

from .logger import get_logger

logger = get_logger(__name__)

# Fields rendered first, in this order
AUDIT_FIELD_ORDER = [
    "status",
    "input_file",
    "record_count",
    "duration",
    "error_count",
    "error_message",
    "correlation_id",
]


def log_audit_event(event_type: str, details: Dict[str, Any]) -> None:
    """Log an audit trail event.

    Creates a structured audit log entry with standard fields. Events are
    logged at INFO level, or ERROR level when status is "failure".

    Args:
        event_type: Type of operation (e.g., "ROSTER_PARSED", "RESIDENTS_CLASSIFIED",
                   "STATISTICS_COMPUTED", "VALIDATION_FAILED")
        details: Dictionary with event details. Common fields include:
                - input_file: Path to input file (if applicable)
                - record_count: Number of residents processed
                - status: "success" or "failure"
                - duration: Operation duration in seconds
                - error_message: Error details (if status is failure)
                - correlation_id: Optional correlation ID for related events

    Example:
        >>> log_audit_event("STATISTICS_COMPUTED", {
        ...     "input_file": "residents.csv",
        ...     "record_count": 250,
        ...     "status": "success",
        ...     "duration": 0.42
        ... })
    """
    # Work on a copy so the caller's dict is left alone
    details = dict(details)
    details.setdefault("timestamp", time.time())
    details.setdefault("correlation_id", str(uuid.uuid4()))

    message_parts = [f"AUDIT [{event_type}]"]

    for field in AUDIT_FIELD_ORDER:
        if field in details:
            value = details[field]
            if field == "duration" and isinstance(value, (int, float)):
                message_parts.append(f"{field}={value:.2f}s")
            else:
                message_parts.append(f"{field}={value}")

    for key, value in details.items():
        if key not in AUDIT_FIELD_ORDER and key != "timestamp":
            message_parts.append(f"{key}={value}")

    audit_message = " | ".join(message_parts)

    if details.get("status") == "failure":
        logger.error(audit_message)
    else:
        logger.info(audit_message)
