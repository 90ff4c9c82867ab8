from __future__ import annotations

import stat
from pathlib import Path

from .errors import DirectoryCreationFailure, PermissionSetFailure
from .logger import ProvisionLogger

DATA_DIR_MODE = 0o700
CERTS_DIR_MODE = 0o755


def _mkdir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryCreationFailure(path, exc) from exc


def chmod_strict(path: Path, mode: int) -> None:
    """chmod *path*, skipping the call when the mode already matches.

    After a previous run chowned the tree away from us, an unprivileged chmod
    would fail with EPERM even though nothing needs to change.
    """
    try:
        if stat.S_IMODE(path.stat().st_mode) == mode:
            return
        path.chmod(mode)
    except OSError as exc:
        raise PermissionSetFailure(path, mode, exc) from exc


def prepare_directories(
    certs_dir: Path,
    data_dir: Path,
    log: ProvisionLogger,
    strict: bool = False,
) -> None:
    log.info(f"Preparing directories: '{certs_dir}' and '{data_dir}'")
    _mkdir(certs_dir)
    _mkdir(data_dir)

    # data holds the cluster files; anything looser than 0700 makes postgres refuse to start
    chmod_strict(data_dir, DATA_DIR_MODE)

    try:
        chmod_strict(certs_dir, CERTS_DIR_MODE)
    except PermissionSetFailure as exc:
        if strict:
            raise
        log.warn(f"{exc.msg} (continuing, set PGINIT_STRICT_PERMS=true to fail instead)")

    log.ok("Directories ready")
