"""Cluster profile and execution request models."""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_CLUSTER_NAME = "minikube"


@dataclass(frozen=True)
class Node:
    """One machine of a cluster profile."""

    name: str = ""
    ip: str = ""
    control_plane: bool = False


@dataclass(frozen=True)
class ClusterConfig:
    """Read-only view of a cluster profile."""

    name: str
    kubernetes_version: str
    binary_mirror: str = ""
    nodes: tuple[Node, ...] = ()

    @property
    def primary_control_plane(self) -> Node | None:
        """Return the first control-plane node, if any."""
        for node in self.nodes:
            if node.control_plane:
                return node
        return None

    def machine_name(self, node: Node) -> str:
        """Return the machine name backing ``node``."""
        if not node.name:
            return self.name
        return f"{self.name}-{node.name}"


@dataclass(frozen=True)
class SSHEndpoint:
    """Connection details for a cluster machine."""

    host: str
    port: int
    user: str
    key_path: str | None = None


@dataclass(frozen=True)
class ExecutionRequest:
    """Single kubectl invocation, built once by the CLI."""

    version: str
    binary_mirror: str = ""
    use_remote: bool = False
    raw_args: tuple[str, ...] = field(default_factory=tuple)


def parse_node(raw: dict[str, object]) -> Node:
    """Build a node from a profile's ``Nodes`` entry."""
    return Node(
        name=str(raw.get("Name") or ""),
        ip=str(raw.get("IP") or ""),
        control_plane=bool(raw.get("ControlPlane", False)),
    )


def parse_cluster_config(name: str, raw: dict[str, object]) -> ClusterConfig:
    """Build a cluster config from a decoded profile ``config.json``."""
    kubernetes = raw.get("KubernetesConfig")
    version = ""
    if isinstance(kubernetes, dict):
        version = str(kubernetes.get("KubernetesVersion") or "")
    nodes_raw = raw.get("Nodes")
    nodes = tuple(
        parse_node(item)
        for item in (nodes_raw if isinstance(nodes_raw, list) else [])
        if isinstance(item, dict)
    )
    return ClusterConfig(
        name=str(raw.get("Name") or name),
        kubernetes_version=version,
        binary_mirror=str(raw.get("BinaryMirror") or ""),
        nodes=nodes,
    )
