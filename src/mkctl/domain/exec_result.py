"""Tagged outcome of a finished kubectl child."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Exited:
    """Child terminated and reported an exit status."""

    code: int


@dataclass(frozen=True)
class Unknown:
    """Child could not be started or its status could not be read."""

    error: str


ExecResult = Exited | Unknown


def from_returncode(returncode: int) -> Exited:
    """Convert a ``subprocess`` return code to an exit status.

    Negative codes mean the child was killed by a signal and are mapped to
    the shell convention ``128 + signum``.
    """
    if returncode < 0:
        return Exited(128 - returncode)
    return Exited(returncode)
