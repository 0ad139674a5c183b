"""PiMainteno command line."""

from __future__ import annotations

import json
from pathlib import Path

import typer

from pimainteno.config import DEFAULT_CONFIG_PATH, ConfigError, load_config
from pimainteno.daemon import build_daemon
from pimainteno.logging import setup_logging
from pimainteno.orchestrator import PipelineError
from pimainteno.projects import Project
from pimainteno.status_store import StatusStore, StatusStoreError, keys

app = typer.Typer(help="Self-healing code maintainer daemon")

ConfigOption = typer.Option(
    Path(DEFAULT_CONFIG_PATH), "--config", "-c", help="Path to the TOML configuration file"
)


def _load(config_path: Path):
    try:
        return load_config(config_path)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2) from e


@app.command()
def run(
    config_path: Path = ConfigOption,
    one_shot: bool = typer.Option(False, "--one-shot", help="Run a single pass and exit"),
    log_dir: Path | None = typer.Option(None, "--log-dir", help="Directory for log files"),
) -> None:
    """Run the maintainer daemon."""
    config = _load(config_path)
    logger = setup_logging(log_dir=log_dir)
    logger.info("Starting PiMainteno with %d projects", len(config.scheduler.projects))

    try:
        daemon = build_daemon(config)
    except StatusStoreError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e

    if one_shot:
        try:
            report = daemon.run_one_shot()
        except PipelineError as e:
            logger.error("One-shot pass failed: %s", e)
            raise typer.Exit(code=1) from e
        finally:
            daemon.status_store.close()
        for key, outcome in report.outcomes.items():
            typer.echo(f"{key}: {outcome}")
        return

    daemon.serve()


@app.command()
def status(config_path: Path = ConfigOption) -> None:
    """Print the recorded run status, per-project outcomes and monitor state as JSON."""
    config = _load(config_path)
    try:
        store = StatusStore(config.cache.path)
    except StatusStoreError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e

    try:
        payload = {
            "status": store.get(keys.RUN_STATUS) or "idle",
            "current_project": store.get(keys.RUN_CURRENT_PROJECT) or None,
            "last_start": store.get(keys.RUN_LAST_START),
            "last_end": store.get(keys.RUN_LAST_END),
            "projects": {
                p: store.get(keys.outcome(Project.from_config(p).key))
                for p in config.scheduler.projects
            },
            "systemd": {
                key.removeprefix("systemd."): value
                for key, value in store.items("systemd.").items()
            },
        }
    finally:
        store.close()
    typer.echo(json.dumps(payload, indent=2))


if __name__ == "__main__":
    app()
