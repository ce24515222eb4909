"""Paths inside a cluster node's filesystem."""

import posixpath

GUEST_PERSISTENT_DIR = "/var/lib/minikube"
GUEST_KUBECONFIG = "/etc/kubernetes/admin.conf"


def guest_kubectl_path(version: str) -> str:
    """Return the node-local kubectl path for ``version``."""
    return posixpath.join(GUEST_PERSISTENT_DIR, "binaries", version, "kubectl")


def guest_kubeconfig_path() -> str:
    """Return the node-local admin kubeconfig path."""
    return GUEST_KUBECONFIG
