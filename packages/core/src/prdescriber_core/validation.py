"""Trigger validation, PR extraction and credential resolution.

Every function takes its inputs explicitly (the event context, the action
inputs, the environment) instead of reading process-wide state.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from prdescriber_core.config import DEFAULT_CONFIG, normalize_settings, parse_ignore_patterns
from prdescriber_core.errors import ConfigMissingError, TriggerInvalidError
from prdescriber_core.gh.event import EventContext
from prdescriber_core.models import Config, PRInfo, TriggerDecision

logger = logging.getLogger(__name__)

PULL_REQUEST_EVENT = "pull_request"
ALLOWED_ACTIONS = ("opened", "synchronize", "reopened")

ANTHROPIC_KEY_MISSING = (
    "Anthropic API key not found. "
    "Please set the anthropic-api-key input or ANTHROPIC_API_KEY environment variable."
)
GITHUB_TOKEN_MISSING = (
    "GitHub token not found. Please set the github-token input or GITHUB_TOKEN environment variable."
)
PR_FIELDS_MISSING = "Required PR fields are missing (title, author, base SHA, head SHA, or URL)"


def validate_trigger_event(event: EventContext) -> None:
    if event.event_name != PULL_REQUEST_EVENT:
        raise TriggerInvalidError("This action can only be used in pull request events.")


def validate_trigger_action(event: EventContext) -> TriggerDecision:
    """Return PROCEED for opened/synchronize/reopened, SKIP for anything else.

    Skipping is a successful no-op run, not an error.
    """
    action = event.action
    if not action or action not in ALLOWED_ACTIONS:
        logger.info("Skipping action for PR action: %s", action or "unknown")
        return TriggerDecision.SKIP
    return TriggerDecision.PROCEED


def extract_pr_info(event: EventContext) -> PRInfo:
    pr = event.pull_request
    if not pr:
        raise TriggerInvalidError("No pull request found in context")

    title = pr.get("title")
    author = (pr.get("user") or {}).get("login")
    base_sha = (pr.get("base") or {}).get("sha")
    head_sha = (pr.get("head") or {}).get("sha")
    url = pr.get("html_url")

    if not (title and author and base_sha and head_sha and url):
        raise TriggerInvalidError(PR_FIELDS_MISSING)

    return PRInfo(
        number=pr.get("number"),
        title=title,
        author=author,
        base_sha=base_sha,
        head_sha=head_sha,
        url=url,
    )


def resolve_config(
    inputs: Mapping[str, str],
    environ: Mapping[str, str],
    file_config: dict | None = None,
) -> Config:
    """Resolve credentials and ignore patterns into an immutable Config.

    An explicit input always wins over its environment fallback. The
    ``ignore-patterns`` input, when given, replaces the file-level list.
    """
    settings = normalize_settings(file_config if file_config is not None else DEFAULT_CONFIG)

    anthropic_api_key = inputs.get("anthropic-api-key") or environ.get("ANTHROPIC_API_KEY")
    github_token = inputs.get("github-token") or environ.get("GITHUB_TOKEN")

    if not anthropic_api_key:
        raise ConfigMissingError("anthropic-api-key", ANTHROPIC_KEY_MISSING)
    if not github_token:
        raise ConfigMissingError("github-token", GITHUB_TOKEN_MISSING)

    ignore_patterns = parse_ignore_patterns(inputs.get("ignore-patterns"))
    if not ignore_patterns:
        ignore_patterns = settings["ignore_patterns"]
    if ignore_patterns:
        logger.info("Ignored patterns: %s", ", ".join(ignore_patterns))

    return Config(
        anthropic_api_key=anthropic_api_key,
        github_token=github_token,
        ignore_patterns=tuple(ignore_patterns),
        model=settings.get("model", DEFAULT_CONFIG["model"]),
        max_tokens=settings.get("max_tokens", DEFAULT_CONFIG["max_tokens"]),
    )
