"""Local system description for Omaha requests

Omaha uses its own names for operating systems and architectures; these
helpers translate what the running interpreter reports.
"""

import platform
from typing import Optional

from .utils.config import OmahaConfig

_PLATFORMS = {
    "darwin": "mac",
    "windows": "win",
}

_ARCHES = {
    "x86_64": "x64",
    "amd64": "x64",
    "x64": "x64",
    "i386": "x86",
    "i686": "x86",
    "x86": "x86",
    "aarch64": "arm64",
    "arm64": "arm64",
}


def local_platform(config: Optional[OmahaConfig] = None) -> str:
    """Omaha platform name of this machine, e.g. ``linux``, ``mac``, ``win``."""
    if config is not None and config.platform:
        return config.platform
    system = platform.system().lower()
    return _PLATFORMS.get(system, system)


def local_arch(config: Optional[OmahaConfig] = None) -> str:
    """Omaha architecture name of this machine, e.g. ``x64``, ``arm64``."""
    if config is not None and config.arch:
        return config.arch
    machine = platform.machine().lower()
    if machine in _ARCHES:
        return _ARCHES[machine]
    if machine.startswith("arm"):
        return "arm"
    return machine
