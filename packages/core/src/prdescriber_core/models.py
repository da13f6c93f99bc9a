from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from prdescriber_core.config import DEFAULT_CONFIG


@dataclass(frozen=True)
class PRInfo:
    number: int
    title: str
    author: str
    base_sha: str
    head_sha: str
    url: str


@dataclass(frozen=True)
class Config:
    anthropic_api_key: str
    github_token: str
    ignore_patterns: tuple[str, ...] = ()
    model: str = DEFAULT_CONFIG["model"]
    max_tokens: int = DEFAULT_CONFIG["max_tokens"]


@dataclass(frozen=True)
class PRContext:
    pr_info: PRInfo
    commit_messages: str
    diff: str


class TriggerDecision(Enum):
    PROCEED = "proceed"
    SKIP = "skip"


@dataclass
class RunResult:
    """Outcome of run_describe. The CLI maps it to an exit code and action output.

    status is "succeeded", "skipped" or "failed". description is set only on
    success; error only on failure.
    """

    status: str
    description: str | None = None
    error: str | None = None
    pr_number: int | None = None

    @property
    def ok(self) -> bool:
        return self.status != "failed"
