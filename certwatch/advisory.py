from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
import time

from certwatch.expiry import Classification, Outcome

_BANNER = " ################# SSL/TLS Certificate Warning ################"
_FOOTER = (
    " ##############################################################\n"
    "                                      Generated by certwatch(1)"
)

_RENEW = (
    "  The certificate needs to be renewed.  Web browsers and\n"
    "  other clients will not be able to correctly connect to this\n"
    "  web site using SSL/TLS until the certificate is renewed."
)

_NOT_YET_VALID = (
    "  The certificate is not valid until {until}.\n"
    "\n"
    "  Web browsers and other clients will not be able to correctly\n"
    "  connect to this web site using SSL/TLS until the certificate\n"
    "  becomes valid."
)


@dataclass(frozen=True)
class AdvisoryMessage:
    recipient: str
    subject: str
    body: str

    def as_text(self) -> str:
        return f"To: {self.recipient}\nSubject: {self.subject}\n\n{self.body}"


def format_instant(value: datetime) -> str:
    """ctime-style rendering of an instant, always in UTC."""

    utc = value.astimezone(timezone.utc)
    return f"{time.asctime(utc.timetuple())} UTC"


def render(
    classification: Classification,
    *,
    hostname: str,
    file_path: str,
    recipient: str,
    not_before: datetime,
) -> AdvisoryMessage | None:
    """Build the warning mail for a classification, or None if nothing is due."""

    if not classification.warning_due:
        return None

    if classification.outcome is Outcome.NOT_YET_VALID:
        paragraph = _NOT_YET_VALID.format(until=format_instant(not_before))
    else:
        paragraph = _RENEW

    body = (
        f"{_BANNER}\n\n"
        f"  Certificate for hostname '{hostname}', in file:\n\n"
        f"     {file_path}\n\n"
        f"{paragraph}\n\n"
        f"{_FOOTER}\n\n"
    )

    return AdvisoryMessage(
        recipient=recipient,
        subject=f"The certificate for {hostname} {classification.phrase}",
        body=body,
    )
