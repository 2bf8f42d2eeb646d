from __future__ import annotations

from datetime import datetime, timezone

from certwatch.advisory import format_instant, render
from certwatch.expiry import Classification, Outcome

START = datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def _render(classification: Classification):
    return render(
        classification,
        hostname="www.example.com",
        file_path="/etc/pki/tls/certs/www.crt",
        recipient="ops@example.com",
        not_before=START,
    )


def test_no_warning_renders_nothing():
    assert _render(Classification(Outcome.NO_WARNING, 90)) is None


def test_expiry_message_headers_and_body():
    message = _render(Classification(Outcome.EXPIRES_IN_DAYS, 12))

    assert message.recipient == "ops@example.com"
    assert message.subject == "The certificate for www.example.com will expire in 12 days"
    assert "Certificate for hostname 'www.example.com', in file:" in message.body
    assert "     /etc/pki/tls/certs/www.crt" in message.body
    assert "needs to be renewed" in message.body
    assert "Generated by certwatch(1)" in message.body


def test_as_text_is_a_mail():
    text = _render(Classification(Outcome.EXPIRED, -1)).as_text()
    lines = text.splitlines()

    assert lines[0] == "To: ops@example.com"
    assert lines[1] == "Subject: The certificate for www.example.com has expired"
    assert lines[2] == ""
    assert "SSL/TLS Certificate Warning" in lines[3]


def test_not_yet_valid_mentions_start_not_renewal():
    message = _render(Classification(Outcome.NOT_YET_VALID))

    assert message.subject.endswith("is not yet valid")
    assert "not valid until Thu Jan  2 03:04:05 2025 UTC" in message.body
    assert "becomes valid" in message.body
    assert "renewed" not in message.body
    assert "days" not in message.subject


def test_format_instant_uses_utc():
    assert format_instant(START) == "Thu Jan  2 03:04:05 2025 UTC"
