"""
pginit.privilege
~~~~~~~~~~~~~~~~
Recursive chown with scoped elevation.  When the current user may not hand
files to the target uid/gid, only the chown itself goes through sudo; the
rest of the run stays unprivileged.
"""

from __future__ import annotations

import os
import subprocess
from pathlib import Path
from typing import Callable, Tuple

from .errors import OwnershipChangeFailure

Runner = Callable[..., subprocess.CompletedProcess]


def needs_elevation(uid: int, gid: int) -> bool:
    euid = os.geteuid()
    if euid == 0:
        return False
    if euid != uid:
        return True
    return gid != os.getegid() and gid not in os.getgroups()


def _reraise(exc: OSError) -> None:
    # os.walk skips unreadable directories unless told otherwise
    raise exc


class LocalChowner:
    requires: Tuple[str, ...] = ()

    def chown_tree(self, path: Path, uid: int, gid: int) -> None:
        try:
            os.chown(path, uid, gid, follow_symlinks=False)
            for root, dirs, files in os.walk(path, onerror=_reraise):
                for name in dirs + files:
                    os.chown(os.path.join(root, name), uid, gid, follow_symlinks=False)
        except OSError as exc:
            raise OwnershipChangeFailure(path, uid, gid, exc.strerror or str(exc)) from exc


class SudoChowner:
    requires: Tuple[str, ...] = ("sudo", "chown")

    def __init__(self, runner: Runner = subprocess.run):
        self.runner = runner

    def chown_tree(self, path: Path, uid: int, gid: int) -> None:
        cmd = ["sudo", "chown", "-R", f"{uid}:{gid}", str(path)]
        try:
            self.runner(cmd, check=True, capture_output=True, text=True)
        except subprocess.CalledProcessError as exc:
            detail = (exc.stderr or "").strip() or f"exit status {exc.returncode}"
            raise OwnershipChangeFailure(path, uid, gid, detail) from exc
        except OSError as exc:
            raise OwnershipChangeFailure(path, uid, gid, str(exc)) from exc


def select_chowner(uid: int, gid: int, runner: Runner = subprocess.run):
    if needs_elevation(uid, gid):
        return SudoChowner(runner)
    return LocalChowner()
