# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/blueprints/cli/app.py
from __future__ import annotations

from typing import Optional

import typer

from blueprints.addons.registry import build_addons, parse_addons_flag
from blueprints.config.loader import load_config
from blueprints.deploy.blueprint import Blueprint
from blueprints.deploy.resources import ApplyContext
from blueprints.errors import BlueprintError
from blueprints.helm.cli_runner import HelmCliRunner
from blueprints.kube.kubectl import KubectlRunner
from blueprints.logging.log import init_logging
from blueprints.observers.dispatcher import EventBus
from blueprints.observers.logger import LoggerObserver


# ------------------------------------------------------------------------------
# CLI setup
# ------------------------------------------------------------------------------

app = typer.Typer(help="Blueprints add-on deployment CLI")


def _blueprint(config: str, addons: Optional[str], bus: Optional[EventBus] = None, run_id: Optional[str] = None) -> Blueprint:
    cfg = load_config(config)
    selection = parse_addons_flag(addons)
    return Blueprint(
        cluster=cfg.cluster,
        addons=build_addons(cfg, selection),
        bus=bus,
        run_id=run_id,
    )


@app.command()
def plan(
    config: str = typer.Argument(..., help="Blueprint definition YAML"),
    addons: Optional[str] = typer.Option(
        None,
        "--addons",
        help="Add-ons to include: adot-collector,amp,fluxcd or all",
    ),
):
    """Print the order resources would be applied in, without touching the cluster."""
    try:
        order = _blueprint(config, addons).plan()
    except BlueprintError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    for i, rid in enumerate(order, start=1):
        typer.echo(f"{i:>3}. {rid}")


@app.command()
def deploy(
    config: str = typer.Argument(..., help="Blueprint definition YAML"),
    addons: Optional[str] = typer.Option(
        None,
        "--addons",
        help="Add-ons to include: adot-collector,amp,fluxcd or all",
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Client-side dry run for kubectl and helm"),
    debug: bool = typer.Option(False, "--debug"),
):
    logger, run_id, log_path = init_logging(verbose=debug)

    typer.echo("")
    typer.secho("Blueprint Deployment Started", bold=True)
    typer.echo(f"  Run ID   : {run_id}")
    typer.echo(f"  Logs     : {log_path}")
    typer.echo("")

    bus = EventBus([LoggerObserver(logger)])

    try:
        blueprint = _blueprint(config, addons, bus=bus, run_id=run_id)
        ctx = ApplyContext(
            kubectl=KubectlRunner(
                kubeconfig=blueprint.cluster.kubeconfig,
                context=blueprint.cluster.context,
                dry_run=dry_run,
            ),
            helm=HelmCliRunner(
                kube_context=blueprint.cluster.context,
                kubeconfig=blueprint.cluster.kubeconfig,
                dry_run=dry_run,
            ),
        )
        report = blueprint.deploy(ctx)
    except BlueprintError as e:
        logger.error("Deployment failed: %s", e)
        typer.secho(f"Deployment failed: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho(f"Deployment complete: {report.summary()}", fg=typer.colors.GREEN)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
