"""Argument rewriting for local and remote kubectl invocations."""

from collections.abc import Sequence

from mkctl.domain.guest_paths import guest_kubeconfig_path, guest_kubectl_path

SHELL_COMPLETION_REQUEST = "__complete"
HELP_FLAG = "--help"


def needs_cluster_scope(args: Sequence[str]) -> bool:
    """Return whether ``--cluster`` must be injected before ``args``."""
    if len(args) <= 1:
        return False
    return args[0] not in (HELP_FLAG, SHELL_COMPLETION_REQUEST)


def local_kubectl_args(args: Sequence[str], cluster: str) -> list[str]:
    """Prepend cluster scoping flags for a host-side kubectl run."""
    if needs_cluster_scope(args):
        return ["--cluster", cluster, *args]
    return list(args)


def remote_kubectl_args(args: Sequence[str], version: str) -> list[str]:
    """Build the privileged node-side kubectl command line."""
    return [
        "sudo",
        guest_kubectl_path(version),
        "--kubeconfig",
        guest_kubeconfig_path(),
        *args,
    ]
