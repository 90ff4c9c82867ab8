from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from .errors import ConfigError

CERT_FILENAME = "cert.pem"
KEY_FILENAME = "key.pem"


@dataclass
class Config:
    uid: int = 70
    gid: int = 70
    cert_subject: str = "/CN=db"
    cert_days: int = 36500
    certs_dir: Path = Path("certs")
    data_dir: Path = Path("data")
    cert_san: str = "DNS:localhost,IP:127.0.0.1"
    openssl_bin: str = "openssl"
    strict_perms: bool = False
    log_path: Optional[Path] = None

    @property
    def cert_path(self) -> Path:
        return self.certs_dir / CERT_FILENAME

    @property
    def key_path(self) -> Path:
        return self.certs_dir / KEY_FILENAME

    def validate(self) -> None:
        if self.uid < 0 or self.gid < 0:
            raise ConfigError(f"uid/gid must be non-negative, got {self.uid}:{self.gid}")
        if self.cert_days <= 0:
            raise ConfigError(f"CERT_DAYS must be positive, got {self.cert_days}")
        if not self.cert_subject.startswith("/"):
            raise ConfigError(f"CERT_SUBJECT must look like '/CN=name', got {self.cert_subject!r}")
        if not self.cert_san:
            raise ConfigError("CERT_SAN must not be empty")


def _int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key, "")
    if not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{key} must be an integer, got {raw!r}") from None


def _str(env: Mapping[str, str], key: str, default: str) -> str:
    # same as ${KEY:-default}: an empty override means "use the default"
    raw = env.get(key) or ""
    return raw if raw.strip() else default


def load_config(environ: Optional[Mapping[str, str]] = None) -> Config:
    """Build a validated Config from *environ* (defaults to .env + os.environ)."""
    if environ is None:
        load_dotenv(override=True)
        environ = os.environ

    log_path = _str(environ, "PGINIT_LOG_PATH", "")
    cfg = Config(
        uid=_int(environ, "POSTGRES_UID", 70),
        gid=_int(environ, "POSTGRES_GID", 70),
        cert_subject=_str(environ, "CERT_SUBJECT", "/CN=db"),
        cert_days=_int(environ, "CERT_DAYS", 36500),
        certs_dir=Path(_str(environ, "CERTS_DIR", "certs")),
        data_dir=Path(_str(environ, "DATA_DIR", "data")),
        cert_san=_str(environ, "CERT_SAN", "DNS:localhost,IP:127.0.0.1"),
        openssl_bin=_str(environ, "OPENSSL_BIN", "openssl"),
        strict_perms=_str(environ, "PGINIT_STRICT_PERMS", "false").lower() == "true",
        log_path=Path(log_path) if log_path else None,
    )
    cfg.validate()
    return cfg
