"""Read cluster profiles and machine records from the state directory."""

import json
import logging
import socket
from pathlib import Path
from typing import Any

from mkctl.domain.cluster import ClusterConfig, Node, SSHEndpoint, parse_cluster_config
from mkctl.domain.errors import ClusterUnreachable, ConfigLoadFallback

logger = logging.getLogger(__name__)

_CONNECT_TIMEOUT_SECONDS = 3.0


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigLoadFallback(f"{path} does not exist") from exc
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigLoadFallback(f"cannot read {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigLoadFallback(f"unexpected content in {path}")
    return data


class ClusterStore:
    """File-backed access to cluster profiles and their machines."""

    def __init__(self, profiles_dir: Path, machines_dir: Path) -> None:
        self.profiles_dir = profiles_dir
        self.machines_dir = machines_dir

    def load(self, name: str) -> ClusterConfig:
        """Load profile ``name``; raises ``ConfigLoadFallback`` on failure."""
        path = self.profiles_dir / name / "config.json"
        raw = _read_json(path)
        try:
            return parse_cluster_config(name, raw)
        except (TypeError, ValueError) as exc:
            raise ConfigLoadFallback(f"invalid profile {path}: {exc}") from exc

    def ssh_endpoint(self, cluster: ClusterConfig, node: Node) -> SSHEndpoint:
        """Return SSH details for the machine backing ``node``."""
        machine = cluster.machine_name(node)
        machine_dir = self.machines_dir / machine
        try:
            raw = _read_json(machine_dir / "config.json")
        except ConfigLoadFallback as exc:
            raise ClusterUnreachable(
                f'machine "{machine}" of cluster "{cluster.name}" not found: {exc}'
            ) from exc

        driver = raw.get("Driver")
        if not isinstance(driver, dict):
            driver = {}
        host = str(driver.get("IPAddress") or node.ip)
        if not host:
            raise ClusterUnreachable(f'machine "{machine}" has no IP address')
        key_path = driver.get("SSHKeyPath") or str(machine_dir / "id_rsa")
        try:
            port = int(driver.get("SSHPort") or 22)
        except (TypeError, ValueError) as exc:
            raise ClusterUnreachable(
                f'machine "{machine}" has an invalid SSH port: {exc}'
            ) from exc
        return SSHEndpoint(
            host=host,
            port=port,
            user=str(driver.get("SSHUser") or "docker"),
            key_path=str(key_path),
        )

    def running_control_plane(self, name: str) -> tuple[ClusterConfig, SSHEndpoint]:
        """Return the config and primary control-plane endpoint of a running cluster."""
        try:
            cluster = self.load(name)
        except ConfigLoadFallback as exc:
            raise ClusterUnreachable(f'cluster "{name}" does not exist: {exc}') from exc

        node = cluster.primary_control_plane
        if node is None:
            raise ClusterUnreachable(f'cluster "{name}" has no control-plane node')

        endpoint = self.ssh_endpoint(cluster, node)
        if not is_listening(endpoint.host, endpoint.port):
            raise ClusterUnreachable(
                f'cluster "{name}" is not running: '
                f"cannot reach {endpoint.host}:{endpoint.port}"
            )
        return cluster, endpoint


def is_listening(host: str, port: int, timeout: float = _CONNECT_TIMEOUT_SECONDS) -> bool:
    """Return whether a TCP connection to ``host:port`` succeeds."""
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return True
    except OSError as exc:
        logger.debug("connect to %s:%s failed: %s", host, port, exc)
        return False
