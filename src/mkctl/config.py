"""Application configuration and environment loading."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from mkctl.domain.cluster import DEFAULT_CLUSTER_NAME
from mkctl.domain.platform_support import DEFAULT_KUBERNETES_VERSION

KUBERNETES_RELEASE_URL = "https://dl.k8s.io/release"


@dataclass(frozen=True)
class DownloadConfig:
    """kubectl download settings."""

    release_url: str = KUBERNETES_RELEASE_URL
    timeout_seconds: float = 60.0


@dataclass(frozen=True)
class MkctlConfig:
    """Top-level config for kubectl dispatch."""

    home: Path = field(default_factory=lambda: Path.home() / ".minikube")
    profile: str = DEFAULT_CLUSTER_NAME
    default_kubernetes_version: str = DEFAULT_KUBERNETES_VERSION
    log_level: str = "WARNING"
    download: DownloadConfig = field(default_factory=DownloadConfig)

    @property
    def profiles_dir(self) -> Path:
        """Return directory holding per-cluster profile configs."""
        return self.home / "profiles"

    @property
    def machines_dir(self) -> Path:
        """Return directory holding per-machine driver configs."""
        return self.home / "machines"

    @property
    def cache_dir(self) -> Path:
        """Return root of the kubectl binary cache."""
        return self.home / "cache"


def resolve_home(raw: str | None) -> Path:
    """Return the state directory for a ``MINIKUBE_HOME`` value."""
    if not raw:
        return Path.home() / ".minikube"
    path = Path(raw).expanduser()
    if path.name == ".minikube":
        return path
    return path / ".minikube"


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


def load_config(env_path: Path = Path(".env")) -> MkctlConfig:
    """Load config from environment and optional .env file."""
    load_dotenv(env_path, override=False)
    return MkctlConfig(
        home=resolve_home(os.getenv("MINIKUBE_HOME")),
        profile=os.getenv("MINIKUBE_PROFILE") or DEFAULT_CLUSTER_NAME,
        default_kubernetes_version=(
            os.getenv("MKCTL_DEFAULT_KUBERNETES_VERSION") or DEFAULT_KUBERNETES_VERSION
        ),
        log_level=(os.getenv("MKCTL_LOG_LEVEL") or "WARNING").upper(),
        download=DownloadConfig(
            timeout_seconds=_float_env("MKCTL_DOWNLOAD_TIMEOUT", 60.0),
        ),
    )
