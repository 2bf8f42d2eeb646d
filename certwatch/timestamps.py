from __future__ import annotations

from datetime import datetime, timezone


class MalformedTimestamp(ValueError):
    def __init__(self, raw: str | bytes, reason: str):
        super().__init__(f"malformed timestamp {raw!r}: {reason}")
        self.raw = raw
        self.reason = reason


def _as_text(raw: str | bytes) -> str:
    if isinstance(raw, (bytes, bytearray)):
        try:
            return bytes(raw).decode("ascii")
        except UnicodeDecodeError:
            raise MalformedTimestamp(raw, "not ASCII") from None
    return raw


def _leading_digits(text: str) -> int:
    count = 0
    for ch in text:
        if ch not in "0123456789":
            break
        count += 1
    return count


def _two(text: str, offset: int) -> int:
    return int(text[offset : offset + 2])


def _build(
    raw: str | bytes, year: int, month: int, day: int, hour: int, minute: int, second: int
) -> datetime:
    try:
        return datetime(year, month, day, hour, minute, second, tzinfo=timezone.utc)
    except ValueError as exc:
        raise MalformedTimestamp(raw, str(exc)) from None


def decode_utctime(raw: str | bytes) -> datetime:
    """Decode a UTCTime value (``YYMMDDHHMM[SS]Z``) into an aware UTC datetime.

    Two-digit years below 70 are 20xx, the rest 19xx. Seconds are optional.
    Calendar fields are validated; out-of-range values raise
    MalformedTimestamp instead of rolling over.
    """

    text = _as_text(raw)
    if len(text) < 10:
        raise MalformedTimestamp(raw, "shorter than 10 characters")
    if _leading_digits(text[:10]) < 10:
        raise MalformedTimestamp(raw, "non-digit in the first 10 characters")

    year = _two(text, 0)
    year += 2000 if year < 70 else 1900

    second = 0
    if _leading_digits(text[10:12]) == 2:
        second = _two(text, 10)

    return _build(
        raw,
        year,
        _two(text, 2),
        _two(text, 4),
        _two(text, 6),
        _two(text, 8),
        second,
    )


def decode_generalized_time(raw: str | bytes) -> datetime:
    """Decode a GeneralizedTime value (``YYYYMMDDHHMM[SS]Z``)."""

    text = _as_text(raw)
    if len(text) < 12:
        raise MalformedTimestamp(raw, "shorter than 12 characters")
    if _leading_digits(text[:12]) < 12:
        raise MalformedTimestamp(raw, "non-digit in the first 12 characters")

    second = 0
    if _leading_digits(text[12:14]) == 2:
        second = _two(text, 12)

    return _build(
        raw,
        int(text[0:4]),
        _two(text, 4),
        _two(text, 6),
        _two(text, 8),
        _two(text, 10),
        second,
    )


def decode_asn1_time(raw: str | bytes) -> datetime:
    """Decode either validity encoding found in X.509 certificates.

    14 or more leading digits can only be a GeneralizedTime with seconds;
    anything shorter is treated as UTCTime.
    """

    text = _as_text(raw)
    if _leading_digits(text) >= 14:
        return decode_generalized_time(raw)
    return decode_utctime(raw)
