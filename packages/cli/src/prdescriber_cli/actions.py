"""GitHub Actions runner I/O: inputs, outputs and workflow-command logging.

Inputs arrive as ``INPUT_<NAME>`` environment variables and outputs are
appended to the file named by ``GITHUB_OUTPUT``. See
https://docs.github.com/actions/using-workflows/workflow-commands-for-github-actions
"""

from __future__ import annotations

import logging
import os
import uuid
from collections.abc import Iterable, Mapping

import click

INPUT_NAMES = ("anthropic-api-key", "github-token", "ignore-patterns")


def get_input(name: str, environ: Mapping[str, str] | None = None) -> str:
    """Return the trimmed value of an action input, or "" when unset.

    The runner's own form (``INPUT_GITHUB-TOKEN``) is tried first, then the
    underscore form a composite action can forward (``INPUT_GITHUB_TOKEN``).
    """
    env = os.environ if environ is None else environ
    key = "INPUT_" + name.replace(" ", "_").upper()
    value = env.get(key)
    if value is None:
        value = env.get(key.replace("-", "_"))
    return (value or "").strip()


def read_inputs(environ: Mapping[str, str] | None = None, names: Iterable[str] = INPUT_NAMES) -> dict[str, str]:
    return {name: get_input(name, environ) for name in names}


def set_output(name: str, value: str, environ: Mapping[str, str] | None = None) -> None:
    """Publish an action output, multi-line safe."""
    env = os.environ if environ is None else environ
    output_path = env.get("GITHUB_OUTPUT")
    if not output_path:
        # Legacy command for runners without an output file.
        click.echo(f"::set-output name={name}::{_escape_data(value)}")
        return

    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    if delimiter in name or delimiter in value:
        raise ValueError(f"Unexpected input: output delimiter collides with the value of {name!r}")
    with open(output_path, "a", encoding="utf-8") as f:
        f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class ActionsFormatter(logging.Formatter):
    """Render log records as workflow commands so the runner annotates them."""

    _COMMANDS = {
        logging.DEBUG: "debug",
        logging.WARNING: "warning",
        logging.ERROR: "error",
        logging.CRITICAL: "error",
    }

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        command = self._COMMANDS.get(record.levelno)
        if command is None:
            return message
        return f"::{command}::{_escape_data(message)}"


def configure_logging(verbose: bool = False) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(ActionsFormatter("%(message)s"))
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    # Keep SDK/HTTP chatter out of the job log.
    for name in ("github", "anthropic", "httpx", "urllib3"):
        logging.getLogger(name).setLevel(logging.WARNING)
