"""hubview command line interface."""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

import typer

from hubview.config import DEFAULT_CONFIG_PATH, Settings, load_settings
from hubview.errors import HubviewError
from hubview.kube import KubeClient
from hubview.models import ManagedClusterFilter
from hubview.observability import get_logger, setup_logging
from hubview.output import OutputFormat, OutputWriter
from hubview.services import (
    ClusterDeploymentService,
    CombinedClusterService,
    KubeconfigExtractor,
    ManagedClusterService,
    filter_by_status,
)

logger = get_logger(__name__)

app = typer.Typer(
    help="Inspect ACM managed clusters and their Hive deployments from the hub.",
    no_args_is_help=True,
)
hub_app = typer.Typer(help="Interact with the ACM hub cluster.", no_args_is_help=True)
spoke_app = typer.Typer(help="Work with individual spoke clusters.", no_args_is_help=True)
app.add_typer(hub_app, name="hub")
app.add_typer(spoke_app, name="spoke")


@dataclass
class CLIState:
    config_path: str
    verbose: bool


@app.callback()
def root(
    ctx: typer.Context,
    config: str = typer.Option(DEFAULT_CONFIG_PATH, "--config", "-c", help="Path to hubview config"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    ctx.obj = CLIState(config_path=config, verbose=verbose)


@contextmanager
def handle_errors() -> Iterator[None]:
    """Report hubview errors on stderr and exit non-zero."""
    try:
        yield
    except HubviewError as e:
        logger.debug("Command failed", error=str(e), error_type=type(e).__name__)
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e


def load_cli_settings(ctx: typer.Context) -> Settings:
    state: CLIState = ctx.obj
    settings = load_settings(state.config_path)
    if state.verbose:
        settings = settings.model_copy(update={"verbose": True})
    setup_logging(settings.effective_log_level, settings.log_format)
    return settings


def connect(settings: Settings) -> KubeClient:
    return KubeClient.from_kubeconfig(settings.hub.kubeconfig, settings.hub.context)


@hub_app.command("managedclusters")
def managed_clusters(
    ctx: typer.Context,
    output: OutputFormat = typer.Option(OutputFormat.TABLE, "--output", "-o", help="Output format"),
    status: str = typer.Option("", "--status", help="Filter by status (Ready|NotReady|Unknown)"),
    wide: bool = typer.Option(False, "--wide", help="Show ClusterDeployment details"),
) -> None:
    """List ACM managed clusters with status information."""
    with handle_errors():
        settings = load_cli_settings(ctx)
        kube = connect(settings)
        writer = OutputWriter(output, sys.stdout)

        managed = ManagedClusterService(kube)
        if wide:
            combined_service = CombinedClusterService(
                managed,
                ClusterDeploymentService(kube),
                max_concurrent_fetches=settings.max_concurrent_fetches,
            )
            combined = asyncio.run(combined_service.list_combined())
            writer.write_combined(filter_by_status(combined, status), wide=True)
        else:
            clusters = asyncio.run(managed.list_clusters())
            clusters = managed.filter(clusters, ManagedClusterFilter(status=status or None))
            writer.write(clusters)


@spoke_app.command("kubeconfig")
def spoke_kubeconfig(
    ctx: typer.Context,
    cluster_name: str = typer.Argument(..., metavar="CLUSTER_NAME", help="Spoke cluster name"),
    output: str = typer.Option("", "--output", "-o", help="Output file path (default: stdout)"),
) -> None:
    """Extract the admin kubeconfig of a spoke cluster.

    The kubeconfig has full cluster-admin privileges. Store it securely.

    Examples:

      hubview spoke kubeconfig my-cluster

      hubview spoke kubeconfig my-cluster -o /tmp/my-cluster.kubeconfig
    """
    with handle_errors():
        settings = load_cli_settings(ctx)
        extractor = KubeconfigExtractor(connect(settings))

        typer.echo(
            "\nWARNING: This is an admin kubeconfig with full cluster-admin privileges!\n"
            "    Please store it securely and restrict access appropriately.\n",
            err=True,
        )

        if output:
            path = asyncio.run(extractor.extract_to_file(cluster_name, output))
            typer.echo(f"Kubeconfig saved to: {path}", err=True)
            typer.echo("  File permissions set to 0600 (owner read/write only)\n", err=True)
            typer.echo("You can now use it with kubectl:", err=True)
            typer.echo(f"  kubectl --kubeconfig {path} get nodes", err=True)
        else:
            kubeconfig = asyncio.run(extractor.extract(cluster_name))
            # Raw bytes go to the binary stdout stream undecoded
            typer.echo(kubeconfig, nl=False)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
