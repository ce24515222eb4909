"""Kubernetes versions and host architectures supported by kubectl releases."""

DEFAULT_KUBERNETES_VERSION = "v1.31.0"

SUPPORTED_ARCHITECTURES: tuple[str, ...] = ("amd64", "arm", "arm64", "ppc64le", "s390x")

_MACHINE_ALIASES: dict[str, str] = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv6l": "arm",
    "armv7l": "arm",
    "armv8l": "arm",
    "i386": "386",
    "i686": "386",
    "x86": "386",
    "ppc64le": "ppc64le",
    "s390x": "s390x",
}


def normalize_version(version: str, *, default: str = DEFAULT_KUBERNETES_VERSION) -> str:
    """Return ``version`` with a leading ``v``, or ``default`` when empty."""
    value = version.strip()
    if not value:
        return default
    return value if value.startswith("v") else f"v{value}"


def kubernetes_arch(machine: str) -> str:
    """Map a ``platform.machine()`` value to a Kubernetes arch name."""
    value = machine.strip().lower()
    return _MACHINE_ALIASES.get(value, value)


def is_supported_arch(arch: str) -> bool:
    """Return whether kubectl is published for ``arch``."""
    return arch in SUPPORTED_ARCHITECTURES
