"""CLI entry point for ambari-shell, built on cli-core-yo.

Provides the ``shell`` command, which opens an interactive session
against an Ambari server (or replays a command script).

Usage::

    ambari-shell --help
    ambari-shell shell --host ambari.example.com --user admin
    ambari-shell shell --script build_cluster.txt
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional, Tuple

import typer
from cli_core_yo import output
from cli_core_yo.app import create_app
from cli_core_yo.runtime import _reset, initialize
from cli_core_yo.spec import CliSpec, XdgSpec

from ambari_shell import ui
from ambari_shell.ambari.client import AmbariClient, AmbariClientError, ManagementClient
from ambari_shell.config.models import ConfigError, ShellConfig
from ambari_shell.shell.registry import CommandRegistry, build_registry
from ambari_shell.state.context import ShellContext
from ambari_shell.workflow.cluster_build import ClusterBuildWorkflow

logger = logging.getLogger(__name__)

# Exit codes
EXIT_SUCCESS = 0
EXIT_CONFIG_ERROR = 1
EXIT_UNREACHABLE = 2
EXIT_COMMAND_ERROR = 3

# ── App specification ────────────────────────────────────────────────────────

spec = CliSpec(
    prog_name="ambari-shell",
    app_display_name="Ambari Shell",
    dist_name="ambari-shell",
    root_help="Interactive shell for building Ambari clusters from blueprints.",
    xdg=XdgSpec(app_dir_name="ambari-shell"),
)

app = create_app(spec)


# ── Root callback (global options) ───────────────────────────────────────────


@app.callback()
def _root_callback() -> None:
    """Ambari Shell."""
    _reset()
    debug = os.environ.get("CLI_CORE_YO_DEBUG") == "1"
    xdg_paths = app._cli_core_yo_xdg_paths  # type: ignore[attr-defined]
    initialize(spec, xdg_paths, json_mode=False, debug=debug)


# ── Session wiring ───────────────────────────────────────────────────────────


def build_session(
    client: ManagementClient,
    prompt_name: str = "ambari-shell",
) -> Tuple[ShellContext, CommandRegistry]:
    """Create the per-session context and its command registry."""
    context = ShellContext(prompt_name=prompt_name)
    workflow = ClusterBuildWorkflow(client, context)
    return context, build_registry(workflow)


def client_from_config(cfg: ShellConfig) -> AmbariClient:
    conn = cfg.ambari
    return AmbariClient(
        conn.host,
        conn.port,
        conn.user,
        conn.password,
        use_ssl=conn.use_ssl,
        timeout=conn.timeout,
    )


# ── shell command ────────────────────────────────────────────────────────────


@app.command()
def shell(
    host: Optional[str] = typer.Option(
        None, "--host", help="Ambari server host. Defaults to AMBARI_HOST or config."
    ),
    port: Optional[int] = typer.Option(
        None, "--port", help="Ambari server port. Defaults to AMBARI_PORT or config."
    ),
    user: Optional[str] = typer.Option(
        None, "--user", help="Ambari user. Defaults to AMBARI_USER or config."
    ),
    password: Optional[str] = typer.Option(
        None, "--password", help="Ambari password. Defaults to AMBARI_PASSWORD or config."
    ),
    config: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to config YAML. Default: ~/.config/ambari-shell/config.yaml",
    ),
    script: Optional[str] = typer.Option(
        None,
        "--script",
        help="Run the commands in this file (one per line) instead of prompting.",
    ),
    debug: bool = typer.Option(
        False, "--debug", help="Enable debug logging."
    ),
) -> None:
    """Open an interactive session against an Ambari server.

    Environment variables:
      AMBARI_HOST, AMBARI_PORT, AMBARI_USER, AMBARI_PASSWORD
        Connection defaults when the matching flag is omitted.
    """
    from ambari_shell.config.loader import load_config
    from ambari_shell.shell.repl import run_script, run_shell

    if debug:
        logging.basicConfig(level=logging.DEBUG)

    try:
        cfg = load_config(
            config,
            overrides={"host": host, "port": port, "user": user, "password": password},
        )
    except ConfigError as exc:
        output.error(str(exc))
        raise typer.Exit(EXIT_CONFIG_ERROR) from exc

    script_lines = None
    if script:
        p = Path(script)
        if not p.is_file():
            output.error(f"Script file not found: {script}")
            raise typer.Exit(EXIT_CONFIG_ERROR)
        script_lines = p.read_text(encoding="utf-8").splitlines()

    client = client_from_config(cfg)
    output.action(f"Connecting to {cfg.ambari.url} ...")
    try:
        blueprints = client.blueprint_ids()
    except AmbariClientError as exc:
        output.error(f"Ambari server unreachable: {exc}")
        raise typer.Exit(EXIT_UNREACHABLE) from exc

    context, registry = build_session(client, cfg.shell.prompt_name)
    try:
        if script_lines is not None:
            errors = run_script(registry, script_lines, echo=ui.info)
            rc = EXIT_SUCCESS if errors == 0 else EXIT_COMMAND_ERROR
        else:
            ui.banner(
                "Ambari Shell",
                f"Connected to {cfg.ambari.url} "
                f"({len(blueprints)} blueprint(s) available).\n"
                "Type 'help' for the available commands, 'exit' to leave.",
            )
            run_shell(registry, context)
            rc = EXIT_SUCCESS
    finally:
        client.close()
    raise typer.Exit(rc)


# ── Entry point ──────────────────────────────────────────────────────────────


def main() -> int:
    """Run the CLI and return an exit code."""
    try:
        app()
        return 0
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 0


if __name__ == "__main__":
    sys.exit(main())
