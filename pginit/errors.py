"""
pginit.errors
~~~~~~~~~~~~~
Failure taxonomy for a provisioning run.  Every error is fatal where it is
raised; the one exception (chmod on the certs directory) is downgraded to a
warning by the caller, not here.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class ProvisionError(Exception):
    exit_code = 1

    def __init__(self, msg: str):
        self.msg = msg
        super().__init__(msg)


class ConfigError(ProvisionError):
    exit_code = 2


class MissingDependency(ProvisionError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Command '{name}' not found. Please install it.")


class DirectoryCreationFailure(ProvisionError):
    def __init__(self, path: Path, cause: OSError):
        self.path = path
        self.cause = cause
        super().__init__(f"Cannot create directory {path}: {cause.strerror or cause}")


class PermissionSetFailure(ProvisionError):
    def __init__(self, path: Path, mode: int, cause: OSError):
        self.path = path
        self.mode = mode
        self.cause = cause
        super().__init__(f"Cannot chmod {mode:o} {path}: {cause.strerror or cause}")


class CertificateGenerationFailure(ProvisionError):
    pass


class CertificateOutputMissing(ProvisionError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Failed to create certificate or key (empty file): {path}")


class OwnershipChangeFailure(ProvisionError):
    def __init__(self, path: Path, uid: int, gid: int, cause: Optional[str] = None):
        self.path = path
        self.uid = uid
        self.gid = gid
        detail = f": {cause}" if cause else ""
        super().__init__(f"Cannot chown {uid}:{gid} {path}{detail}")
