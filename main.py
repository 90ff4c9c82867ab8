import argparse
import os
import sys

from dotenv import load_dotenv

load_dotenv(override=True)

from pginit.config import load_config
from pginit.core import run_provisioner
from pginit.errors import ConfigError
from pginit.logger import ProvisionLogger
from pginit.tips import render_tips

ENV_HELP = """
Environment overrides (also read from a .env file):
  POSTGRES_UID, POSTGRES_GID   - numeric UID/GID for file ownership (default: 70)
  CERT_SUBJECT                 - certificate subject (default: /CN=db)
  CERT_DAYS                    - certificate validity days (default: 36500)
  CERTS_DIR, DATA_DIR          - directories for certs & data (default: certs, data)
  CERT_SAN                     - additional subjectAltName (default: DNS:localhost,IP:127.0.0.1)
  OPENSSL_BIN                  - openssl executable (default: openssl)
  PGINIT_STRICT_PERMS          - fail instead of warn if chmod on CERTS_DIR fails (default: false)
  PGINIT_LOG_PATH              - also write JSON-lines logs next to this path (default: off)

This tool will create directories if missing, generate a self-signed
certificate if absent, and set secure permissions and ownership.
"""


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pgtls-init",
        description="Prepare certs/ and data/ for a PostgreSQL container with TLS enabled.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=ENV_HELP,
    )
    parser.add_argument(
        "--no-tips",
        action="store_true",
        help="do not print the docker-compose / postgresql.conf tips on success",
    )
    return parser


def main(argv=None) -> int:
    args = create_parser().parse_args(argv)

    try:
        config = load_config(os.environ)
    except ConfigError as e:
        log = ProvisionLogger()
        log.err(e.msg)
        return e.exit_code

    rc = run_provisioner(config)
    if rc == 0 and not args.no_tips:
        print(render_tips(config))
    return rc


if __name__ == "__main__":
    sys.exit(main())
