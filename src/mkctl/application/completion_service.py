"""Forward shell-completion requests to kubectl's ``__complete`` command."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from mkctl.application.kubectl_dispatch_service import BinaryLocator
from mkctl.domain.completion import CompletionResponse, parse_completion_output
from mkctl.domain.errors import (
    BinaryUnavailable,
    CompletionProtocolError,
    UnsupportedArchitecture,
)
from mkctl.domain.kubectl_args import SHELL_COMPLETION_REQUEST
from mkctl.domain.platform_support import is_supported_arch
from mkctl.infrastructure.host_platform import runtime_arch
from mkctl.infrastructure.kubectl_client import KubectlError, kubectl_text

logger = logging.getLogger(__name__)


class KubectlCompleter:
    """Completion proxy that never engages the execution dispatcher."""

    def __init__(
        self,
        binaries: BinaryLocator,
        *,
        detect_arch: Callable[[], str] = runtime_arch,
        capture: Callable[[str, Sequence[str]], str] = kubectl_text,
    ) -> None:
        self.binaries = binaries
        self.detect_arch = detect_arch
        self.capture = capture

    def request(
        self,
        version: str,
        binary_mirror: str,
        args: Sequence[str],
        incomplete: str,
    ) -> CompletionResponse:
        """Return parsed completions; raises ``CompletionProtocolError``."""
        arch = self.detect_arch()
        try:
            if not is_supported_arch(arch):
                raise UnsupportedArchitecture(arch)
            binary = str(self.binaries.kubectl(version, binary_mirror))
            output = self.capture(
                binary, [SHELL_COMPLETION_REQUEST, *args, incomplete]
            )
        except (BinaryUnavailable, UnsupportedArchitecture, KubectlError) as exc:
            raise CompletionProtocolError(f"completion failed: {exc}") from exc
        return parse_completion_output(output)

    def complete(
        self,
        version: str,
        binary_mirror: str,
        args: Sequence[str],
        incomplete: str,
    ) -> CompletionResponse:
        """Return completions, reporting protocol errors as the error directive."""
        try:
            return self.request(version, binary_mirror, args, incomplete)
        except CompletionProtocolError as exc:
            logger.debug("%s", exc)
            return CompletionResponse.error()
