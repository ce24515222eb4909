"""Tests for the mkctl command line."""

from __future__ import annotations

import json
import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from mkctl.application import ExitDecision
from mkctl.cli.main import _complete_kubectl_args, app
from mkctl.domain.completion import CompletionResponse, ShellCompDirective
from mkctl.domain.errors import BinaryUnavailable, ClusterUnreachable, UnsupportedArchitecture

runner = CliRunner()


@pytest.fixture
def env(tmp_path: Path) -> dict[str, str]:
    return {
        "MINIKUBE_HOME": str(tmp_path),
        "MINIKUBE_PROFILE": "c1",
        "MKCTL_LOG_LEVEL": "WARNING",
    }


def test_version() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "mkctl" in result.output


def test_global_options_without_command() -> None:
    result = runner.invoke(app, ["-p", "dev"])
    assert result.exit_code == 0


def test_passes_args_after_separator(env: dict[str, str]) -> None:
    with patch(
        "mkctl.cli.main.execute_kubectl", return_value=ExitDecision(code=0)
    ) as execute:
        result = runner.invoke(app, ["kubectl", "--", "get", "pods", "-A"], env=env)

    assert result.exit_code == 0
    args, kwargs = execute.call_args
    assert args[0] == ["get", "pods", "-A"]
    assert kwargs["use_ssh"] is False
    assert kwargs["cluster_name"] is None


def test_ssh_flag_and_profile(env: dict[str, str]) -> None:
    with patch(
        "mkctl.cli.main.execute_kubectl", return_value=ExitDecision(code=0)
    ) as execute:
        result = runner.invoke(
            app, ["-p", "dev", "kubectl", "--ssh", "--", "--help"], env=env
        )

    assert result.exit_code == 0
    args, kwargs = execute.call_args
    assert args[0] == ["--help"]
    assert kwargs["use_ssh"] is True
    assert kwargs["cluster_name"] == "dev"


def test_child_exit_code_propagates(env: dict[str, str]) -> None:
    with patch("mkctl.cli.main.execute_kubectl", return_value=ExitDecision(code=42)):
        result = runner.invoke(app, ["kubectl", "--", "get", "pods"], env=env)
    assert result.exit_code == 42


def test_uninspectable_child_is_diagnosed(env: dict[str, str]) -> None:
    decision = ExitDecision(code=1, diagnostic="Error running /bin/kubectl: boom")
    with patch("mkctl.cli.main.execute_kubectl", return_value=decision):
        result = runner.invoke(app, ["kubectl", "--", "version"], env=env)
    assert result.exit_code == 1
    assert "/bin/kubectl" in result.output


@pytest.mark.parametrize(
    ("error", "message"),
    [
        (UnsupportedArchitecture("386"), "Not supported on: 386"),
        (BinaryUnavailable("offline"), "Error caching kubectl: offline"),
        (ClusterUnreachable("stopped"), "Error running kubectl: stopped"),
    ],
)
def test_fatal_errors_exit_one(
    env: dict[str, str], error: Exception, message: str
) -> None:
    with patch("mkctl.cli.main.execute_kubectl", side_effect=error):
        result = runner.invoke(app, ["kubectl", "--", "get", "pods"], env=env)
    assert result.exit_code == 1
    assert message in result.output


def test_local_run_end_to_end(tmp_path: Path, env: dict[str, str]) -> None:
    state = tmp_path / ".minikube"
    profile = state / "profiles" / "c1" / "config.json"
    profile.parent.mkdir(parents=True)
    profile.write_text(
        json.dumps({"Name": "c1", "KubernetesConfig": {"KubernetesVersion": "v1.30.0"}}),
        encoding="utf-8",
    )
    binary = state / "cache" / "linux" / "amd64" / "v1.30.0" / "kubectl"
    binary.parent.mkdir(parents=True)
    binary.write_text("#!/bin/sh\n", encoding="utf-8")

    completed = subprocess.CompletedProcess(args=[str(binary)], returncode=42)
    with (
        patch("mkctl.infrastructure.host_platform.platform.machine", return_value="x86_64"),
        patch("mkctl.infrastructure.host_platform.sys.platform", "linux"),
        patch(
            "mkctl.infrastructure.kubectl_client.subprocess.run", return_value=completed
        ) as run,
    ):
        result = runner.invoke(app, ["kubectl", "--", "get", "pods"], env=env)

    assert result.exit_code == 42
    run.assert_called_once_with(
        [str(binary), "--cluster", "c1", "get", "pods"], check=False
    )


def test_completion_callback_forwards_typed_args() -> None:
    ctx = MagicMock()
    ctx.params = {"args": ("get",)}
    ctx.find_root.return_value.params = {"profile": "dev"}
    response = CompletionResponse(
        candidates=("pods", "posts"), directive=ShellCompDirective.NO_FILE_COMP
    )
    with patch("mkctl.cli.main.complete_kubectl", return_value=response) as complete:
        assert _complete_kubectl_args(ctx, "po") == ["pods", "posts"]
    complete.assert_called_once_with(["get"], "po", cluster_name="dev")


def test_completion_callback_error_directive_yields_nothing() -> None:
    ctx = MagicMock()
    ctx.params = {}
    ctx.find_root.return_value.params = {}
    with patch(
        "mkctl.cli.main.complete_kubectl", return_value=CompletionResponse.error()
    ):
        assert _complete_kubectl_args(ctx, "") == []


def test_invalid_config_exits_one(env: dict[str, str]) -> None:
    result = runner.invoke(
        app,
        ["kubectl", "--", "get", "pods"],
        env={**env, "MKCTL_DOWNLOAD_TIMEOUT": "soon"},
    )
    assert result.exit_code == 1
    assert "MKCTL_DOWNLOAD_TIMEOUT" in result.output


@pytest.mark.parametrize(
    ("profile_text", "version"),
    [
        (
            json.dumps(
                {
                    "KubernetesConfig": {"KubernetesVersion": "v1.30.0"},
                    "Nodes": [{"Port": "not-a-port", "ControlPlane": True}],
                }
            ),
            "v1.30.0",
        ),
        ("{", "v1.29.0"),
    ],
)
def test_malformed_profile_does_not_abort_local_run(
    tmp_path: Path, env: dict[str, str], profile_text: str, version: str
) -> None:
    state = tmp_path / ".minikube"
    profile = state / "profiles" / "c1" / "config.json"
    profile.parent.mkdir(parents=True)
    profile.write_text(profile_text, encoding="utf-8")
    binary = state / "cache" / "linux" / "amd64" / version / "kubectl"
    binary.parent.mkdir(parents=True)
    binary.write_text("#!/bin/sh\n", encoding="utf-8")

    completed = subprocess.CompletedProcess(args=[str(binary)], returncode=0)
    with (
        patch("mkctl.infrastructure.host_platform.platform.machine", return_value="x86_64"),
        patch("mkctl.infrastructure.host_platform.sys.platform", "linux"),
        patch(
            "mkctl.infrastructure.kubectl_client.subprocess.run", return_value=completed
        ) as run,
    ):
        result = runner.invoke(
            app,
            ["kubectl", "--", "get", "pods"],
            env={**env, "MKCTL_DEFAULT_KUBERNETES_VERSION": "v1.29.0"},
        )

    assert result.exit_code == 0
    assert run.call_args.args[0][0] == str(binary)
