"""Base describer implementing the Template Method pattern.

All providers share the same algorithm:
    describe() → _build_system_prompt() + _build_user_prompt()
               → _log_context_stats()
               → _call_api()   ← only this differs per provider

Subclasses implement two things only:
  - __init__: store the SDK client
  - _call_api: make one raw API call and return the description text
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from prdescriber_core.config import DEFAULT_CONFIG
from prdescriber_core.models import PRContext

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are an experienced software engineer writing the description of a GitHub pull request.
You are given the pull request title, its author, the list of commits and the unified diff.

Write a description in GitHub-flavored Markdown with exactly these sections:

## Summary
One or two sentences stating what the change does and why.

## Changes
A bulleted list of the notable changes, grouped by area. Mention files or
modules in `inline code` when it helps the reader find them.

## Notes for reviewers
Anything a reviewer should pay special attention to: behaviour changes,
migrations, risky areas, follow-ups. Write "None." if there is nothing.

Rules:
- Be concise and factual. Describe only what the diff and commits show.
- Do not invent motivations, ticket numbers or test results.
- Do not praise the change or the author.
- Write in the same language as the pull request title.
- Output only the description, with no preamble and no closing remarks."""


def count_commits(commit_messages: str) -> int:
    return sum(1 for line in commit_messages.split("\n") if line.strip())


class BaseDescriber(ABC):
    MAX_TOKENS: int = DEFAULT_CONFIG["max_tokens"]

    def describe(self, pr_context: PRContext) -> str:
        """Generate a PR description for pr_context.

        Raises GenerationError when the model call fails or returns no text.
        """
        system = self._build_system_prompt()
        user = self._build_user_prompt(pr_context)
        self._log_context_stats(user, pr_context)
        return self._call_api(system, user)

    @abstractmethod
    def _call_api(self, system_prompt: str, user_prompt: str) -> str:
        """Make a single API call and return the description text verbatim.

        No retries: any failure must be raised as a GenerationError.
        """

    def _build_system_prompt(self) -> str:
        return SYSTEM_PROMPT

    def _build_user_prompt(self, pr_context: PRContext) -> str:
        pr_info = pr_context.pr_info
        commits = pr_context.commit_messages or "(no commits)"
        diff = pr_context.diff or "(empty diff)"
        return f"""## Pull Request
Title: {pr_info.title}
Author: {pr_info.author}

## Commits
{commits}

## Diff
```diff
{diff}
```"""

    def _log_context_stats(self, user_prompt: str, pr_context: PRContext) -> None:
        logger.info("Context size: %d characters", len(user_prompt))
        logger.info("Commits: %d", count_commits(pr_context.commit_messages))
        logger.info("Diff lines: %d", len(pr_context.diff.split("\n")))
