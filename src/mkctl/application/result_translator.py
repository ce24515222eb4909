"""Map a finished kubectl child to this process's exit status."""

from dataclasses import dataclass

from mkctl.domain.exec_result import ExecResult, Exited, Unknown

UNINSPECTABLE_EXIT_CODE = 1


@dataclass(frozen=True)
class ExitDecision:
    """Exit status plus an optional stderr diagnostic."""

    code: int
    diagnostic: str | None = None


def translate_result(binary: str, result: ExecResult) -> ExitDecision:
    """Propagate the child's status, or diagnose an uninspectable one."""
    match result:
        case Exited(code=code):
            return ExitDecision(code=code)
        case Unknown(error=error):
            return ExitDecision(
                code=UNINSPECTABLE_EXIT_CODE,
                diagnostic=f"Error running {binary}: {error}",
            )
    raise TypeError(f"unexpected execution result: {result!r}")
