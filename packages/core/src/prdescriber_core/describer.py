"""Core PR description orchestration."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor, as_completed

from rich.console import Console
from rich.markdown import Markdown

from prdescriber_core.gh.event import EventContext
from prdescriber_core.gh.pull_request import generate_diff, get_commit_messages, get_repo, update_pr_description
from prdescriber_core.models import Config, PRContext, PRInfo, RunResult, TriggerDecision
from prdescriber_core.providers.anthropic import AnthropicDescriber
from prdescriber_core.validation import (
    extract_pr_info,
    resolve_config,
    validate_trigger_action,
    validate_trigger_event,
)

console = Console()
logger = logging.getLogger(__name__)


def generate_description(api_key: str, pr_context: PRContext, config: Config | None = None) -> str:
    """Ask the model for a PR description. Raises GenerationError on failure."""
    describer = AnthropicDescriber(
        api_key=api_key,
        model=config.model if config else None,
        max_tokens=config.max_tokens if config else None,
    )
    return describer.describe(pr_context)


def fetch_pr_context(repo, pr_info: PRInfo, ignore_patterns) -> PRContext:
    """Fetch the filtered diff and the commit summary concurrently.

    Both must succeed; the first failure to complete is raised. The other
    request is left to finish on its own.
    """
    with ThreadPoolExecutor(max_workers=2) as executor:
        diff_future = executor.submit(generate_diff, repo, pr_info.base_sha, pr_info.head_sha, ignore_patterns)
        commits_future = executor.submit(get_commit_messages, repo, pr_info.number)
        for future in as_completed([diff_future, commits_future]):
            future.result()

    return PRContext(pr_info=pr_info, commit_messages=commits_future.result(), diff=diff_future.result())


def print_shadow_description(pr_info: PRInfo, description: str) -> None:
    """Print the generated description to the terminal without updating the PR."""
    console.print(f"\n[bold]Shadow run: description for PR #{pr_info.number} (not posted)[/bold]\n")
    console.print(Markdown(description))
    console.print()


def run_describe(
    event: EventContext,
    inputs: Mapping[str, str],
    environ: Mapping[str, str],
    file_config: dict | None = None,
    shadow: bool = False,
    repo_obj=None,
) -> RunResult:
    """Run the full pipeline for one pull request event.

    Never raises for pipeline failures: every error is logged once and
    returned as a failed RunResult. A disallowed PR action returns a
    skipped RunResult.
    """
    try:
        logger.info("Starting PR description automation...")

        validate_trigger_event(event)
        if validate_trigger_action(event) is TriggerDecision.SKIP:
            return RunResult(status="skipped")
        config = resolve_config(inputs, environ, file_config)
        pr_info = extract_pr_info(event)

        logger.info("Analyzing PR #%s: %s", pr_info.number, pr_info.title)
        logger.info("Author: %s", pr_info.author)
        logger.info("Base SHA: %s", pr_info.base_sha)
        logger.info("Head SHA: %s", pr_info.head_sha)

        repo = repo_obj if repo_obj is not None else get_repo(event.repository, token=config.github_token)

        pr_context = fetch_pr_context(repo, pr_info, config.ignore_patterns)
        description = generate_description(config.anthropic_api_key, pr_context, config)

        if shadow:
            print_shadow_description(pr_info, description)
        else:
            update_pr_description(repo, pr_info.number, description)
            logger.info("PR description updated successfully! View at: %s", pr_info.url)

        return RunResult(status="succeeded", description=description, pr_number=pr_info.number)
    except Exception as e:
        logger.error("Error: %s", e)
        return RunResult(status="failed", error=str(e))
