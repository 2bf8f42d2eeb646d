from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID


@pytest.fixture(scope="session")
def signing_key():
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture
def make_cert(tmp_path: Path, signing_key):
    """Write a self-signed PEM certificate and return its path."""

    def _make(
        *,
        cn: str | None = "www.example.com",
        not_before: datetime | None = None,
        not_after: datetime | None = None,
        name: str = "cert.pem",
    ) -> Path:
        now = datetime.now(timezone.utc).replace(microsecond=0)
        not_before = not_before or now - timedelta(days=1)
        not_after = not_after or now + timedelta(days=365)

        attrs = [x509.NameAttribute(NameOID.ORGANIZATION_NAME, "Example Org")]
        if cn is not None:
            attrs.append(x509.NameAttribute(NameOID.COMMON_NAME, cn))
        subject = x509.Name(attrs)

        cert = (
            x509.CertificateBuilder()
            .subject_name(subject)
            .issuer_name(subject)
            .public_key(signing_key.public_key())
            .serial_number(x509.random_serial_number())
            .not_valid_before(not_before)
            .not_valid_after(not_after)
            .sign(signing_key, hashes.SHA256())
        )

        path = tmp_path / name
        path.write_bytes(cert.public_bytes(serialization.Encoding.PEM))
        return path

    return _make
