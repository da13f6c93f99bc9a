"""CLI entry point for pr-describer.

Commands:
  run   generate a PR description for the current pull request event and
        write it back to the pull request (the GitHub Action step)
"""

from __future__ import annotations

import importlib.metadata
import os

import click
from rich.console import Console
from rich.markup import escape

from prdescriber_cli.actions import configure_logging, read_inputs, set_output

console = Console()


@click.group()
@click.version_option(
    version=importlib.metadata.version("pr-describer"),
    prog_name="pr-describer",
)
@click.option(
    "--config",
    "config_path",
    default=".pr-describer.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="PR_DESCRIBER_CONFIG",
)
@click.pass_context
def main(ctx: click.Context, config_path: str):
    """Generate GitHub pull request descriptions with Claude."""
    from prdescriber_core.config import load_config
    from prdescriber_core.errors import ConfigInvalidError

    ctx.ensure_object(dict)
    try:
        ctx.obj["config"] = load_config(config_path)
    except ConfigInvalidError as e:
        raise click.UsageError(f"Invalid configuration in {config_path}: {e}")


@main.command("run")
@click.option(
    "--shadow",
    "-s",
    is_flag=True,
    help="Dry-run mode: print the generated description without updating the PR.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def run_cmd(ctx: click.Context, shadow: bool, verbose: bool):
    """Describe the pull request that triggered this workflow run.

    \b
    Reads the event from GITHUB_EVENT_NAME / GITHUB_EVENT_PATH / GITHUB_REPOSITORY.
    Action inputs (INPUT_*) take precedence over these fallbacks:
      ANTHROPIC_API_KEY    Anthropic API key
      GITHUB_TOKEN         GitHub token with pull-requests: write
    """
    from prdescriber_core.describer import run_describe
    from prdescriber_core.gh.event import EventContext

    configure_logging(verbose)

    environ = dict(os.environ)
    event = EventContext.from_environ(environ)
    result = run_describe(
        event,
        inputs=read_inputs(environ),
        environ=environ,
        file_config=ctx.obj["config"],
        shadow=shadow,
    )

    if result.status == "failed":
        console.print(f"[red]pr-describer failed: {escape(result.error)}[/red]")
        ctx.exit(1)
    if result.status == "skipped":
        console.print("[yellow]Nothing to do for this pull request action.[/yellow]")
        return

    set_output("description", result.description, environ)
    console.print(f"[green]Description generated for PR #{result.pr_number}.[/green]")
