"""Custom log formatters for RBI Registry.

This module provides specialized formatters for logging, including PII redaction.
"""

import logging
import re
from typing import List, Tuple


class PIIRedactingFormatter(logging.Formatter):
    """Formatter that redacts Personally Identifiable Information from log messages.

    Resident rosters carry names and birthdates; when redaction is enabled
    these are masked before the record reaches any handler.

    Attributes:
        redact_pii: Whether to enable PII redaction
        patterns: List of (regex_pattern, replacement_text) tuples for redaction

    Example:
        >>> formatter = PIIRedactingFormatter(redact_pii=True)
        >>> handler = logging.StreamHandler()
        >>> handler.setFormatter(formatter)
    """

    def __init__(
        self,
        fmt: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt: str | None = None,
        redact_pii: bool = False,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.redact_pii = redact_pii

        self.patterns: List[Tuple[re.Pattern[str], str]] = [
            # birthdate=1980-01-15, birthdate: 1980-01-15
            (re.compile(r'(birthdate[=:]\s*)["\']?\d{4}-\d{2}-\d{2}["\']?'),
             r'\1[DOB-REDACTED]'),

            # name="Juan Dela Cruz", name='Maria Santos', name=Pedro
            (re.compile(r'name=["\']?([^"\'|,]+)["\']?'), 'name=[NAME-REDACTED]'),

            # "Resident: Juan Dela Cruz", "Name: Maria Santos"
            (re.compile(r'(Resident|Name):\s+[A-Z][a-z]+(?:\s+[A-Z][a-z]+)+'),
             r'\1: [NAME-REDACTED]'),
        ]

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with optional PII redaction.

        Args:
            record: Log record to format

        Returns:
            Formatted log message with PII redacted if enabled
        """
        original = super().format(record)

        if self.redact_pii:
            for pattern, replacement in self.patterns:
                original = pattern.sub(replacement, original)

        return original
