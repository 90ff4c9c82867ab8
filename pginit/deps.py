from __future__ import annotations

import os
import shutil
from typing import Callable, Iterable, Optional

from .errors import MissingDependency

Which = Callable[[str], Optional[str]]

# primitives the filesystem steps rely on; os.chown is absent on Windows
_OS_PRIMITIVES = (
    ("mkdir", "makedirs"),
    ("chmod", "chmod"),
    ("chown", "chown"),
)


def check_dependencies(tools: Iterable[str], which: Which = shutil.which) -> None:
    """Raise MissingDependency for the first capability that is not available."""
    for name, attr in _OS_PRIMITIVES:
        if not hasattr(os, attr):
            raise MissingDependency(name)

    for tool in tools:
        if which(tool) is None:
            raise MissingDependency(tool)
