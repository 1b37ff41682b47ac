"""Equity valuation error types."""

from __future__ import annotations

from datetime import date
from enum import Enum
from pathlib import Path


class EquityValueErrorCode(Enum):
    """Error classification codes."""

    NO_VALUATION = "no_valuation"
    INVALID_SCHEDULE = "invalid_schedule"
    MALFORMED_INPUT = "malformed_input"


class EquityValueError(Exception):
    """Base exception for a failed valuation run.

    Every failure is a data problem with the inputs, never a transient one,
    so there is no retry flag.

    Attributes:
        message: Human-readable error description.
        code: Structured error code for programmatic handling.
    """

    def __init__(
        self,
        message: str,
        code: EquityValueErrorCode,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class NoValuationAvailable(EquityValueError):
    """No price has been recorded on or before the requested date."""

    def __init__(self, on: date, grant_name: str | None = None) -> None:
        message = f"No valuation found for {on.isoformat()}"
        if grant_name is not None:
            message = f"{message} (grant '{grant_name}')"
        super().__init__(message, EquityValueErrorCode.NO_VALUATION)
        self.on = on
        self.grant_name = grant_name


class InvalidScheduleDefinition(EquityValueError):
    """Vesting schedule parameters that cannot produce a valid schedule."""

    def __init__(self, message: str, grant_name: str | None = None) -> None:
        if grant_name is not None:
            message = f"Grant '{grant_name}': {message}"
        super().__init__(message, EquityValueErrorCode.INVALID_SCHEDULE)
        self.grant_name = grant_name


class MalformedInput(EquityValueError):
    """Structurally invalid portfolio data."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message, EquityValueErrorCode.MALFORMED_INPUT)
        self.path = Path(path) if path is not None else None
