"""Tests for cluster profile models and platform helpers."""

from __future__ import annotations

import pytest

from mkctl.domain.cluster import Node, parse_cluster_config
from mkctl.domain.platform_support import (
    DEFAULT_KUBERNETES_VERSION,
    is_supported_arch,
    kubernetes_arch,
    normalize_version,
)


def _profile() -> dict[str, object]:
    return {
        "Name": "dev",
        "BinaryMirror": "https://mirror.example.com/k8s",
        "KubernetesConfig": {"KubernetesVersion": "v1.28.3"},
        "Nodes": [
            {"Name": "", "IP": "192.168.49.2", "Port": 8443, "ControlPlane": True},
            {"Name": "m02", "IP": "192.168.49.3", "ControlPlane": False},
        ],
    }


def test_parse_cluster_config() -> None:
    cfg = parse_cluster_config("dev", _profile())
    assert cfg.kubernetes_version == "v1.28.3"
    assert cfg.binary_mirror == "https://mirror.example.com/k8s"
    assert len(cfg.nodes) == 2
    assert cfg.primary_control_plane == Node(
        name="", ip="192.168.49.2", control_plane=True
    )


def test_parse_cluster_config_tolerates_missing_fields() -> None:
    cfg = parse_cluster_config("bare", {})
    assert cfg.name == "bare"
    assert cfg.kubernetes_version == ""
    assert cfg.binary_mirror == ""
    assert cfg.primary_control_plane is None


def test_machine_name() -> None:
    cfg = parse_cluster_config("dev", _profile())
    assert cfg.machine_name(cfg.nodes[0]) == "dev"
    assert cfg.machine_name(cfg.nodes[1]) == "dev-m02"


@pytest.mark.parametrize(
    ("machine", "arch"),
    [
        ("x86_64", "amd64"),
        ("AMD64", "amd64"),
        ("aarch64", "arm64"),
        ("armv7l", "arm"),
        ("ppc64le", "ppc64le"),
        ("i686", "386"),
        ("riscv64", "riscv64"),
    ],
)
def test_kubernetes_arch(machine: str, arch: str) -> None:
    assert kubernetes_arch(machine) == arch


def test_supported_architectures() -> None:
    assert is_supported_arch("amd64")
    assert is_supported_arch("s390x")
    assert not is_supported_arch("386")
    assert not is_supported_arch("riscv64")


def test_normalize_version() -> None:
    assert normalize_version("1.30.0") == "v1.30.0"
    assert normalize_version("v1.30.0") == "v1.30.0"
    assert normalize_version("") == DEFAULT_KUBERNETES_VERSION
    assert normalize_version("  ", default="v1.29.0") == "v1.29.0"
