"""Run commands on cluster machines through the system ``ssh`` client."""

import logging
import shlex
import subprocess
import sys
from collections.abc import Sequence

from mkctl.domain.cluster import SSHEndpoint
from mkctl.domain.exec_result import ExecResult, Unknown, from_returncode

logger = logging.getLogger(__name__)

SSH_CLIENT = "ssh"

SSH_OPTIONS: tuple[str, ...] = (
    "-F", "/dev/null",
    "-o", "ConnectionAttempts=3",
    "-o", "ConnectTimeout=10",
    "-o", "ControlMaster=no",
    "-o", "ControlPath=none",
    "-o", "LogLevel=quiet",
    "-o", "PasswordAuthentication=no",
    "-o", "ServerAliveInterval=60",
    "-o", "StrictHostKeyChecking=no",
    "-o", "UserKnownHostsFile=/dev/null",
)  # fmt: skip


def build_ssh_args(
    endpoint: SSHEndpoint,
    command: Sequence[str],
    *,
    tty: bool = False,
    ssh_binary: str = SSH_CLIENT,
) -> list[str]:
    """Build the ``ssh`` command line running ``command`` on ``endpoint``."""
    args = [ssh_binary, *SSH_OPTIONS]
    if endpoint.key_path:
        args.extend(["-o", "IdentitiesOnly=yes", "-i", endpoint.key_path])
    args.extend(["-p", str(endpoint.port)])
    if tty:
        args.append("-t")
    args.append(f"{endpoint.user}@{endpoint.host}")
    args.append(shlex.join(command))
    return args


def run_ssh_interactive(endpoint: SSHEndpoint, command: Sequence[str]) -> ExecResult:
    """Run ``command`` remotely with the parent's terminal attached."""
    args = build_ssh_args(endpoint, command, tty=sys.stdin.isatty())
    logger.info("Running SSH %s", list(command))
    try:
        completed = subprocess.run(args, check=False)
    except OSError as exc:
        return Unknown(str(exc))
    return from_returncode(completed.returncode)
