from __future__ import annotations

from .config import Config
from .dirs import DATA_DIR_MODE, chmod_strict
from .logger import ProvisionLogger

CERT_FILE_MODE = 0o644
KEY_FILE_MODE = 0o600


def enforce_ownership(cfg: Config, chowner, log: ProvisionLogger) -> None:
    """Apply file modes, then hand both trees to uid:gid.

    Runs on every invocation so a tree touched by hand converges back.
    """
    log.info("Setting ownership & permissions for certs & data")

    # modes first, then ownership: once chowned we may no longer be allowed to chmod
    chmod_strict(cfg.cert_path, CERT_FILE_MODE)
    chmod_strict(cfg.key_path, KEY_FILE_MODE)

    for path in (cfg.certs_dir, cfg.data_dir):
        chowner.chown_tree(path, cfg.uid, cfg.gid)

    chmod_strict(cfg.data_dir, DATA_DIR_MODE)
    log.ok("Initialization complete.", uid=cfg.uid, gid=cfg.gid)
