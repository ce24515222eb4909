"""Host operating system and architecture detection."""

import platform
import sys

from mkctl.domain.platform_support import kubernetes_arch


def runtime_arch() -> str:
    """Return the Kubernetes architecture name of the running host."""
    return kubernetes_arch(platform.machine())


def runtime_os() -> str:
    """Return the Kubernetes OS name of the running host."""
    if sys.platform.startswith("win"):
        return "windows"
    if sys.platform == "darwin":
        return "darwin"
    return "linux"


def kubectl_binary_name(os_name: str) -> str:
    """Return the kubectl file name published for ``os_name``."""
    return "kubectl.exe" if os_name == "windows" else "kubectl"
