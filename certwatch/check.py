from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path

from certwatch.advisory import AdvisoryMessage, render
from certwatch.certs import CertificateError, load_certificate
from certwatch.config import Settings
from certwatch.expiry import Classification, ValidityWindow, classify
from certwatch.timestamps import MalformedTimestamp, decode_asn1_time


class Verdict(str, Enum):
    ERROR = "error"
    WARNING_DUE = "warning-due"
    NO_WARNING = "no-warning"


@dataclass(frozen=True)
class CheckResult:
    path: Path
    verdict: Verdict
    hostname: str | None = None
    window: ValidityWindow | None = None
    classification: Classification | None = None
    message: AdvisoryMessage | None = None
    error: str | None = None
    suppressed: bool = False

    def to_dict(self) -> dict:
        payload: dict = {
            "cert_path": str(self.path),
            "verdict": self.verdict.value,
            "hostname": self.hostname,
            "suppressed": self.suppressed,
        }
        if self.window is not None:
            payload["not_before"] = self.window.not_before.isoformat()
            payload["not_after"] = self.window.not_after.isoformat()
        if self.classification is not None:
            payload["outcome"] = self.classification.outcome.value
            payload["days_to_expiry"] = self.classification.days
        if self.message is not None:
            payload["subject"] = self.message.subject
        if self.error is not None:
            payload["error"] = self.error
        return payload


def check_certificate(
    cert_path: Path, settings: Settings, *, now: datetime | None = None
) -> CheckResult:
    """Check one certificate file against the warning period.

    Load, name and decode failures come back as an ERROR verdict. The mail
    text is only rendered when a warning is due and quiet mode is off.
    """

    now = now or datetime.now(timezone.utc).replace(microsecond=0)

    try:
        cert = load_certificate(cert_path)
        window = ValidityWindow(
            not_before=decode_asn1_time(cert.not_before),
            not_after=decode_asn1_time(cert.not_after),
        )
    except (CertificateError, MalformedTimestamp) as exc:
        return CheckResult(path=cert_path, verdict=Verdict.ERROR, error=str(exc))

    if cert.hostname in settings.ignore_hostnames:
        return CheckResult(
            path=cert_path,
            verdict=Verdict.NO_WARNING,
            hostname=cert.hostname,
            window=window,
            suppressed=True,
        )

    classification = classify(window, now, settings.warn_period)
    if not classification.warning_due:
        return CheckResult(
            path=cert_path,
            verdict=Verdict.NO_WARNING,
            hostname=cert.hostname,
            window=window,
            classification=classification,
        )

    message = None
    if not settings.quiet:
        message = render(
            classification,
            hostname=cert.hostname,
            file_path=str(cert_path),
            recipient=settings.warn_address,
            not_before=window.not_before,
        )

    return CheckResult(
        path=cert_path,
        verdict=Verdict.WARNING_DUE,
        hostname=cert.hostname,
        window=window,
        classification=classification,
        message=message,
    )
