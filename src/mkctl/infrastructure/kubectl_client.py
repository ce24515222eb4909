"""Shared kubectl execution helpers."""

import logging
import subprocess
from collections.abc import Sequence

from mkctl.domain.exec_result import ExecResult, Unknown, from_returncode

logger = logging.getLogger(__name__)


class KubectlError(RuntimeError):
    """Raised when kubectl command execution fails."""


def run_kubectl_interactive(path: str, args: Sequence[str]) -> ExecResult:
    """Run kubectl with the parent's stdin, stdout and stderr."""
    logger.info("Running %s %s", path, list(args))
    try:
        completed = subprocess.run([path, *args], check=False)
    except OSError as exc:
        return Unknown(str(exc))
    return from_returncode(completed.returncode)


def kubectl_text(path: str, args: Sequence[str]) -> str:
    """Execute kubectl and return captured stdout."""
    logger.debug("Capturing %s %s", path, list(args))
    try:
        result = subprocess.run(
            [path, *args],
            capture_output=True,
            text=True,
            check=True,
        )
    except subprocess.CalledProcessError as exc:
        stderr = exc.stderr.strip() if exc.stderr else str(exc)
        raise KubectlError(f"kubectl command failed: {stderr}") from exc
    except OSError as exc:
        raise KubectlError(f"kubectl could not be started: {exc}") from exc
    return result.stdout
