"""
pginit.tls
~~~~~~~~~~
Self-signed server certificate for postgres, minted with the OpenSSL CLI.
The cert/key pair is created once and left alone afterwards; if only one
half of the pair survives, both are regenerated.
"""

from __future__ import annotations

import contextlib
import os
import subprocess
from pathlib import Path
from typing import Callable, Iterator, List

from .config import Config
from .errors import CertificateGenerationFailure, CertificateOutputMissing
from .logger import ProvisionLogger

Runner = Callable[..., subprocess.CompletedProcess]

KEY_BITS = 4096


def cert_pair_present(cert: Path, key: Path) -> bool:
    return cert.is_file() and key.is_file()


@contextlib.contextmanager
def restrictive_umask(mask: int = 0o077) -> Iterator[None]:
    """New files are owner-only until the block exits."""
    previous = os.umask(mask)
    try:
        yield
    finally:
        os.umask(previous)


def openssl_command(
    openssl_bin: str,
    cert: Path,
    key: Path,
    subject: str,
    days: int,
    san: str,
) -> List[str]:
    return [
        openssl_bin, "req", "-x509",
        "-newkey", f"rsa:{KEY_BITS}",
        "-sha256", "-nodes",
        "-keyout", str(key),
        "-out", str(cert),
        "-days", str(days),
        "-subj", subject,
        "-addext", f"subjectAltName={san}",
    ]


def generate_self_signed(
    cert: Path,
    key: Path,
    subject: str,
    days: int,
    san: str,
    openssl_bin: str = "openssl",
    runner: Runner = subprocess.run,
) -> None:
    cmd = openssl_command(openssl_bin, cert, key, subject, days, san)
    try:
        with restrictive_umask():
            runner(cmd, check=True, capture_output=True, text=True)
    except subprocess.CalledProcessError as exc:
        detail = (exc.stderr or "").strip() or f"exit status {exc.returncode}"
        raise CertificateGenerationFailure(f"openssl failed: {detail}") from exc
    except OSError as exc:
        raise CertificateGenerationFailure(f"Cannot run {openssl_bin}: {exc}") from exc


def verify_output(cert: Path, key: Path) -> None:
    # openssl can exit 0 without writing anything when pointed at a bad path
    for path in (key, cert):
        try:
            size = path.stat().st_size
        except FileNotFoundError:
            size = 0
        if size == 0:
            raise CertificateOutputMissing(path)


def ensure_certificate(
    cfg: Config,
    log: ProvisionLogger,
    runner: Runner = subprocess.run,
) -> bool:
    """Make sure cert.pem/key.pem exist.  Returns True if they were just created."""
    cert, key = cfg.cert_path, cfg.key_path
    if cert_pair_present(cert, key):
        log.ok(f"Certificate already present: {cert} & {key} (skip generate)")
        return False

    log.info(
        f"Creating self-signed certificate (subject: '{cfg.cert_subject}', SAN: '{cfg.cert_san}')",
        days=cfg.cert_days,
    )
    generate_self_signed(
        cert,
        key,
        cfg.cert_subject,
        cfg.cert_days,
        cfg.cert_san,
        openssl_bin=cfg.openssl_bin,
        runner=runner,
    )
    verify_output(cert, key)
    log.ok("Certificate and key created")
    return True
