"""CLI entrypoint for mkctl."""

import logging
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as package_version

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from mkctl.application import complete_kubectl, execute_kubectl
from mkctl.config import load_config
from mkctl.domain.errors import (
    BinaryUnavailable,
    ClusterUnreachable,
    MkctlError,
    UnsupportedArchitecture,
)

app = typer.Typer(
    name="mkctl",
    help="Run cluster-matched Kubernetes clients for local clusters",
    no_args_is_help=True,
    add_completion=True,
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
err_console = Console(stderr=True)

KUBECTL_HELP = """Run a kubectl binary matching the cluster version.

Run the Kubernetes client, download it if necessary. Remember -- after kubectl!

Normally it will download a binary matching the host operating system and
architecture, but optionally you can also run it directly on the control plane
over the ssh connection. This can be useful if you cannot run kubectl locally
for some reason, like unsupported host. Please be aware that when using --ssh
all paths will apply to the remote machine.
"""

KUBECTL_EPILOG = (
    "Examples: mkctl kubectl -- --help ; "
    "mkctl kubectl -- get pods --namespace kube-system"
)


def _resolve_version() -> str:
    """Return installed package version or local fallback."""
    try:
        return package_version("mkctl")
    except PackageNotFoundError:
        return "0.1.0"


def _configure_logging(level: str, verbose: int) -> None:
    if level not in logging.getLevelNamesMapping():
        level = "WARNING"
    if verbose >= 2:
        level = "DEBUG"
    elif verbose == 1:
        level = "INFO"
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _profile_from(ctx: typer.Context) -> str | None:
    root = ctx.find_root()
    profile = root.params.get("profile")
    return profile if isinstance(profile, str) and profile else None


@app.callback()
def callback(
    ctx: typer.Context,
    profile: str | None = typer.Option(
        None,
        "--profile",
        "-p",
        help="Cluster profile name. Defaults to $MINIKUBE_PROFILE or 'minikube'.",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Log to stderr; repeat for debug output.",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
    ),
) -> None:
    """Handle global CLI options."""
    if version:
        typer.echo(f"mkctl {_resolve_version()}")
        raise typer.Exit(code=0)
    if ctx.invoked_subcommand is None:
        raise typer.Exit(code=0)
    try:
        cfg = load_config()
    except ValueError as exc:
        err_console.print(f"[red]ERROR:[/red] {escape(str(exc))}", soft_wrap=True)
        raise typer.Exit(code=1) from exc
    _configure_logging(cfg.log_level, verbose)
    ctx.obj = cfg


def _handle_error(exc: MkctlError) -> None:
    """Convert domain exceptions to CLI exit codes."""
    if isinstance(exc, BinaryUnavailable):
        message = f"Error caching kubectl: {exc}"
    elif isinstance(exc, ClusterUnreachable):
        message = f"Error running kubectl: {exc}"
    elif isinstance(exc, UnsupportedArchitecture):
        message = str(exc)
    else:
        message = f"Error: {exc}"
    err_console.print(f"[red]ERROR:[/red] {escape(message)}", soft_wrap=True)
    raise typer.Exit(code=1) from exc


def _complete_kubectl_args(ctx: typer.Context, incomplete: str) -> list[str]:
    """Shell-completion callback forwarding to kubectl's completion protocol.

    Only candidates reach the shell: click has no channel for the directive
    (NO_SPACE, NO_FILE_COMP, ...), and typer drops candidates that do not
    start with ``incomplete``.
    """
    typed = ctx.params.get("args") or ()
    response = complete_kubectl(
        [str(arg) for arg in typed],
        incomplete,
        cluster_name=_profile_from(ctx),
    )
    return list(response.candidates)


@app.command(
    "kubectl",
    help=KUBECTL_HELP,
    epilog=KUBECTL_EPILOG,
    context_settings={
        "ignore_unknown_options": True,
        "allow_interspersed_args": False,
    },
)
def kubectl_command(
    ctx: typer.Context,
    ssh: bool = typer.Option(
        False,
        "--ssh",
        help="Use SSH for running kubernetes client on the node",
    ),
    args: list[str] | None = typer.Argument(
        None,
        help="Arguments passed verbatim to kubectl.",
        autocompletion=_complete_kubectl_args,
        show_default=False,
    ),
) -> None:
    """Run kubectl for the selected cluster."""
    try:
        decision = execute_kubectl(
            list(args or []),
            use_ssh=ssh,
            cluster_name=_profile_from(ctx),
            cfg=ctx.obj,
        )
    except MkctlError as exc:
        _handle_error(exc)
        return
    if decision.diagnostic:
        err_console.print(escape(decision.diagnostic), soft_wrap=True)
    if decision.code != 0:
        raise typer.Exit(code=decision.code)


def main() -> None:
    """Project entrypoint for `mkctl` script."""
    app()


if __name__ == "__main__":
    main()
