"""Choose between host-side and node-side kubectl and run it."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from mkctl.domain.cluster import ClusterConfig, ExecutionRequest, SSHEndpoint
from mkctl.domain.errors import ConfigLoadFallback, UnsupportedArchitecture
from mkctl.domain.exec_result import ExecResult, Unknown
from mkctl.domain.kubectl_args import local_kubectl_args, remote_kubectl_args
from mkctl.domain.platform_support import is_supported_arch
from mkctl.infrastructure.host_platform import runtime_arch
from mkctl.infrastructure.kubectl_client import run_kubectl_interactive
from mkctl.infrastructure.ssh_client import SSH_CLIENT, run_ssh_interactive

logger = logging.getLogger(__name__)


class BinaryLocator(Protocol):
    """Anything that can resolve a kubectl binary for a version."""

    def kubectl(self, version: str, binary_mirror: str = "") -> Path:
        """Return a path to kubectl ``version``, fetching it if needed."""
        ...


class ClusterSource(Protocol):
    """Anything that can load cluster profiles."""

    def load(self, name: str) -> ClusterConfig:
        """Load profile ``name`` or raise ``ConfigLoadFallback``."""
        ...

    def running_control_plane(self, name: str) -> tuple[ClusterConfig, SSHEndpoint]:
        """Return config and control-plane endpoint or raise ``ClusterUnreachable``."""
        ...


@dataclass(frozen=True)
class Dispatched:
    """What was run and how it ended."""

    binary: str
    args: tuple[str, ...]
    result: ExecResult


def build_request(
    clusters: ClusterSource,
    cluster_name: str,
    args: Sequence[str],
    *,
    use_remote: bool,
    default_version: str,
) -> ExecutionRequest:
    """Build an execution request, falling back to defaults without a profile."""
    version = default_version
    binary_mirror = ""
    try:
        cluster = clusters.load(cluster_name)
    except ConfigLoadFallback as exc:
        logger.debug("Using default kubectl %s: %s", default_version, exc)
    else:
        version = cluster.kubernetes_version
        binary_mirror = cluster.binary_mirror
    return ExecutionRequest(
        version=version,
        binary_mirror=binary_mirror,
        use_remote=use_remote,
        raw_args=tuple(args),
    )


class KubectlDispatcher:
    """Run kubectl locally or on the cluster's control-plane node."""

    def __init__(
        self,
        binaries: BinaryLocator,
        clusters: ClusterSource,
        *,
        detect_arch: Callable[[], str] = runtime_arch,
        run_local: Callable[[str, Sequence[str]], ExecResult] = run_kubectl_interactive,
        run_remote: Callable[
            [SSHEndpoint, Sequence[str]], ExecResult
        ] = run_ssh_interactive,
    ) -> None:
        self.binaries = binaries
        self.clusters = clusters
        self.detect_arch = detect_arch
        self.run_local = run_local
        self.run_remote = run_remote

    def dispatch(self, cluster_name: str, request: ExecutionRequest) -> Dispatched:
        """Run ``request`` against ``cluster_name`` and wait for it to finish."""
        if request.use_remote:
            return self._dispatch_remote(cluster_name, request)
        return self._dispatch_local(cluster_name, request)

    def _dispatch_remote(
        self, cluster_name: str, request: ExecutionRequest
    ) -> Dispatched:
        cluster, endpoint = self.clusters.running_control_plane(cluster_name)
        args = remote_kubectl_args(request.raw_args, cluster.kubernetes_version)
        result = self.run_remote(endpoint, args)
        # ssh itself failed to start
        binary = SSH_CLIENT if isinstance(result, Unknown) else args[1]
        return Dispatched(binary=binary, args=tuple(args), result=result)

    def _dispatch_local(
        self, cluster_name: str, request: ExecutionRequest
    ) -> Dispatched:
        arch = self.detect_arch()
        if not is_supported_arch(arch):
            raise UnsupportedArchitecture(arch)

        args = local_kubectl_args(request.raw_args, cluster_name)
        binary = str(self.binaries.kubectl(request.version, request.binary_mirror))
        result = self.run_local(binary, args)
        return Dispatched(binary=binary, args=tuple(args), result=result)
