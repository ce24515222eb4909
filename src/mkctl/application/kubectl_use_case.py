"""kubectl use-cases wired to the on-disk state directory."""

from collections.abc import Sequence

from mkctl.application.completion_service import KubectlCompleter
from mkctl.application.kubectl_dispatch_service import KubectlDispatcher, build_request
from mkctl.application.result_translator import ExitDecision, translate_result
from mkctl.config import MkctlConfig, load_config
from mkctl.domain.completion import CompletionResponse
from mkctl.infrastructure.cluster_store import ClusterStore
from mkctl.infrastructure.kubectl_binary_cache import KubectlBinaryCache


def _binary_cache(cfg: MkctlConfig) -> KubectlBinaryCache:
    return KubectlBinaryCache(
        cfg.cache_dir,
        download=cfg.download,
        default_version=cfg.default_kubernetes_version,
    )


def _cluster_store(cfg: MkctlConfig) -> ClusterStore:
    return ClusterStore(cfg.profiles_dir, cfg.machines_dir)


def execute_kubectl(
    args: Sequence[str],
    *,
    use_ssh: bool = False,
    cluster_name: str | None = None,
    cfg: MkctlConfig | None = None,
) -> ExitDecision:
    """Run kubectl for the selected cluster and decide the exit status.

    Fatal conditions (unreachable cluster, unsupported architecture,
    unavailable binary) are raised as ``MkctlError`` subclasses.
    """
    cfg = cfg or load_config()
    name = cluster_name or cfg.profile
    clusters = _cluster_store(cfg)
    request = build_request(
        clusters,
        name,
        args,
        use_remote=use_ssh,
        default_version=cfg.default_kubernetes_version,
    )
    dispatched = KubectlDispatcher(_binary_cache(cfg), clusters).dispatch(name, request)
    return translate_result(dispatched.binary, dispatched.result)


def complete_kubectl(
    args: Sequence[str],
    incomplete: str,
    *,
    cluster_name: str | None = None,
    cfg: MkctlConfig | None = None,
) -> CompletionResponse:
    """Return kubectl completions for the selected cluster's version."""
    cfg = cfg or load_config()
    name = cluster_name or cfg.profile
    request = build_request(
        _cluster_store(cfg),
        name,
        args,
        use_remote=False,
        default_version=cfg.default_kubernetes_version,
    )
    return KubectlCompleter(_binary_cache(cfg)).complete(
        request.version, request.binary_mirror, request.raw_args, incomplete
    )


__all__ = ["complete_kubectl", "execute_kubectl"]
