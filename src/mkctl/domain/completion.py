"""Parser for kubectl's ``__complete`` shell-completion protocol.

kubectl answers a completion request with one candidate per line, optionally
followed by a tab and a description, and a final ``:<directive>`` line.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag

from mkctl.domain.errors import CompletionProtocolError


class ShellCompDirective(IntFlag):
    """Hints telling the invoking shell how to treat candidates."""

    DEFAULT = 0
    ERROR = 1
    NO_SPACE = 2
    NO_FILE_COMP = 4
    FILTER_FILE_EXT = 8
    FILTER_DIRS = 16
    KEEP_ORDER = 32


@dataclass(frozen=True)
class CompletionResponse:
    """Ordered completion candidates plus the trailing directive."""

    candidates: tuple[str, ...]
    directive: ShellCompDirective

    @classmethod
    def error(cls) -> CompletionResponse:
        """Return the response used to signal a failed completion."""
        return cls(candidates=(), directive=ShellCompDirective.ERROR)


def parse_completion_output(output: str) -> CompletionResponse:
    """Parse raw ``__complete`` output into candidates and a directive."""
    lines = [line.split("\t", 1)[0] for line in output.splitlines()]
    if not lines:
        raise CompletionProtocolError("completion returned no output")

    raw_directive = lines[-1]
    if raw_directive.startswith(":"):
        raw_directive = raw_directive[1:]
    try:
        directive = int(raw_directive)
    except ValueError as exc:
        raise CompletionProtocolError(
            f"invalid completion directive: {lines[-1]!r}"
        ) from exc
    if directive < 0:
        raise CompletionProtocolError(f"invalid completion directive: {lines[-1]!r}")

    return CompletionResponse(
        candidates=tuple(lines[:-1]),
        directive=ShellCompDirective(directive),
    )
