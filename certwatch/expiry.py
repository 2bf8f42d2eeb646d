from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum

_ONE_DAY = timedelta(days=1)


class Outcome(str, Enum):
    NOT_YET_VALID = "not-yet-valid"
    EXPIRED = "expired"
    EXPIRES_TODAY = "expires-today"
    EXPIRES_TOMORROW = "expires-tomorrow"
    EXPIRES_IN_DAYS = "expires-in-days"
    NO_WARNING = "no-warning"


@dataclass(frozen=True)
class ValidityWindow:
    # No ordering between the two is enforced.
    not_before: datetime
    not_after: datetime


@dataclass(frozen=True)
class Classification:
    outcome: Outcome
    days: int | None = None

    @property
    def warning_due(self) -> bool:
        return self.outcome is not Outcome.NO_WARNING

    @property
    def phrase(self) -> str:
        if self.outcome is Outcome.NOT_YET_VALID:
            return "is not yet valid"
        if self.outcome is Outcome.EXPIRED:
            return "has expired"
        if self.outcome is Outcome.EXPIRES_TODAY:
            return "will expire today"
        if self.outcome is Outcome.EXPIRES_TOMORROW:
            return "will expire tomorrow"
        if self.outcome is Outcome.EXPIRES_IN_DAYS:
            return f"will expire in {self.days} days"
        return ""


def _utc(value: datetime, name: str) -> datetime:
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError(f"{name} must be timezone-aware")
    return value.astimezone(timezone.utc)


def days_to_expiry(not_after: datetime, now: datetime) -> int:
    """Whole days from now until not_after, rounded down.

    One second past expiry is already -1.
    """

    return (_utc(not_after, "not_after") - _utc(now, "now")) // _ONE_DAY


def classify(window: ValidityWindow, now: datetime, threshold_days: int) -> Classification:
    """Classify a validity window against the current instant.

    The checks run in a fixed order and the first match wins: not yet
    valid, expired, today, tomorrow, within the threshold, otherwise no
    warning.
    """

    if threshold_days < 0:
        raise ValueError(f"threshold_days must be >= 0, got {threshold_days}")

    start = _utc(window.not_before, "not_before")
    now = _utc(now, "now")

    if now < start:
        return Classification(Outcome.NOT_YET_VALID)

    days = days_to_expiry(window.not_after, now)

    if days < 0:
        return Classification(Outcome.EXPIRED, days)
    if days == 0:
        return Classification(Outcome.EXPIRES_TODAY, days)
    if days == 1:
        return Classification(Outcome.EXPIRES_TOMORROW, days)
    if days < threshold_days:
        return Classification(Outcome.EXPIRES_IN_DAYS, days)
    return Classification(Outcome.NO_WARNING, days)
