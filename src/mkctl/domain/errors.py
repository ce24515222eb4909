"""Error taxonomy for kubectl dispatch."""


class MkctlError(RuntimeError):
    """Base class for fatal dispatch failures."""


class ConfigLoadFallback(MkctlError):
    """Cluster config could not be loaded; defaults are substituted."""


class ClusterUnreachable(MkctlError):
    """Raised when the target cluster is not running or has no reachable node."""


class UnsupportedArchitecture(MkctlError):
    """Raised when kubectl cannot run on the detected host architecture."""

    def __init__(self, arch: str) -> None:
        super().__init__(f"Not supported on: {arch}")
        self.arch = arch


class BinaryUnavailable(MkctlError):
    """Raised when kubectl cannot be downloaded or placed in the cache."""


class CompletionProtocolError(MkctlError):
    """Raised when a completion response violates the completion protocol."""
