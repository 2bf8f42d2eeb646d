from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from cryptography import x509
from cryptography.x509.oid import NameOID
from OpenSSL import crypto


class CertificateError(Exception):
    pass


class CertificateLoadError(CertificateError):
    pass


class NameExtractionError(CertificateError):
    pass


@dataclass(frozen=True)
class CertificateFile:
    path: Path
    hostname: str
    # Raw ASN.1 time strings as stored, e.g. b"250101000000Z" (UTCTime)
    # or b"20550101000000Z" (GeneralizedTime).
    not_before: bytes
    not_after: bytes


def read_pem_certificate(cert_pem_path: Path) -> x509.Certificate:
    """Parse the first PEM certificate in a file."""

    try:
        data = cert_pem_path.read_bytes()
    except OSError as exc:
        raise CertificateLoadError(f"cannot read {cert_pem_path}: {exc.strerror}") from exc

    try:
        return x509.load_pem_x509_certificate(data)
    except ValueError as exc:
        raise CertificateLoadError(f"not a PEM certificate: {cert_pem_path}") from exc


def common_name(cert: x509.Certificate) -> str:
    attrs = cert.subject.get_attributes_for_oid(NameOID.COMMON_NAME)
    if not attrs or not attrs[0].value:
        raise NameExtractionError("certificate subject has no commonName")
    value = attrs[0].value
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    return value


def as_stored(generalized: bytes) -> bytes:
    """Undo OpenSSL's widening of UTCTime to GeneralizedTime.

    X.509 stores years 1950-2049 as UTCTime, so a four-digit year in that
    range was a two-digit year on disk. Those values are handed back in
    UTCTime layout so the two-digit year is interpreted here, not by OpenSSL.
    """

    year = generalized[:4]
    if year.isdigit() and 1950 <= int(year) <= 2049:
        return generalized[2:]
    return generalized


def raw_validity(cert: x509.Certificate) -> tuple[bytes, bytes]:
    # cryptography exposes only decoded datetimes; the encoded strings come
    # from pyOpenSSL.
    legacy = crypto.X509.from_cryptography(cert)
    not_before = legacy.get_notBefore()
    not_after = legacy.get_notAfter()
    if not_before is None or not_after is None:
        raise CertificateLoadError("certificate has no validity period")
    return as_stored(not_before), as_stored(not_after)


def load_certificate(cert_pem_path: Path) -> CertificateFile:
    cert = read_pem_certificate(cert_pem_path)
    not_before, not_after = raw_validity(cert)

    return CertificateFile(
        path=cert_pem_path,
        hostname=common_name(cert),
        not_before=not_before,
        not_after=not_after,
    )
