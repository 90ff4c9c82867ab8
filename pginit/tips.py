from __future__ import annotations

from .config import CERT_FILENAME, KEY_FILENAME, Config

_TIPS = """
Tips:
- For the postgres:alpine image the default 'postgres' UID is 70 (this run used {uid}).
  If you switch to a Debian-based image (e.g. postgres:16), the UID is often 999.
  Run with: POSTGRES_UID=999 POSTGRES_GID=999 python main.py

- Example docker-compose bind mounts:
    ./{data_dir}/db  -> /var/lib/postgresql
    ./{certs_dir}/{cert} -> /var/lib/postgresql/{cert}:ro
    ./{certs_dir}/{key}  -> /var/lib/postgresql/{key}:ro
    ./init-sql -> /docker-entrypoint-initdb.d:ro
  And in postgresql.conf:
    ssl = on
    ssl_cert_file = '{cert}'
    ssl_key_file  = '{key}'

- For Npgsql/.NET development, add:
    SSL Mode=Require;Trust Server Certificate=true
  to the connection string if you want to bypass validation for a self-signed certificate.
"""


def render_tips(cfg: Config) -> str:
    return _TIPS.format(
        uid=cfg.uid,
        data_dir=cfg.data_dir.as_posix(),
        certs_dir=cfg.certs_dir.as_posix(),
        cert=CERT_FILENAME,
        key=KEY_FILENAME,
    )
