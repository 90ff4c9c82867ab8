"""
pginit.core
~~~~~~~~~~~
Sequential provisioning run: dependencies, directories, certificate,
ownership.  Every step is idempotent or convergent, so a failed run is
fixed by running again rather than by rollback.
"""

from __future__ import annotations

import shutil
import subprocess
from typing import Optional

from .config import Config
from .deps import Which, check_dependencies
from .dirs import prepare_directories
from .errors import ProvisionError
from .logger import ProvisionLogger
from .perms import enforce_ownership
from .privilege import Runner, select_chowner
from .tls import ensure_certificate

EXIT_INTERRUPTED = 130


def run_provisioner(config: Config, log: Optional[ProvisionLogger] = None, **kwargs) -> int:
    log = log or ProvisionLogger()
    try:
        Provisioner(config, log=log, **kwargs).run()
    except ProvisionError as e:
        log.err(e.msg, error=type(e).__name__)
        log.err(f"Script exited with code: {e.exit_code}")
        return e.exit_code
    except KeyboardInterrupt:
        log.err("Interrupted; re-run to finish provisioning")
        return EXIT_INTERRUPTED
    finally:
        log.close()
    return 0


class Provisioner:
    def __init__(
        self,
        cfg: Config,
        log: Optional[ProvisionLogger] = None,
        runner: Optional[Runner] = None,
        chowner=None,
        which: Optional[Which] = None,
    ) -> None:
        self.cfg = cfg
        self.log = log or ProvisionLogger()
        self.runner = runner or subprocess.run
        self.chowner = chowner or select_chowner(cfg.uid, cfg.gid, self.runner)
        self.which = which or shutil.which
        self.generated = False

    def run(self) -> None:
        self.check_dependencies()
        if self.cfg.log_path:
            jsonl_file = self.log.open_file(self.cfg.log_path)
            self.log.info(f"Writing JSON log to {jsonl_file}")
        prepare_directories(
            self.cfg.certs_dir,
            self.cfg.data_dir,
            self.log,
            strict=self.cfg.strict_perms,
        )
        self.generated = ensure_certificate(self.cfg, self.log, runner=self.runner)
        enforce_ownership(self.cfg, self.chowner, self.log)

    def check_dependencies(self) -> None:
        self.log.info("Checking dependencies...")
        tools = [self.cfg.openssl_bin, *self.chowner.requires]
        check_dependencies(tools, which=self.which)
        self.log.ok("Dependencies OK")
