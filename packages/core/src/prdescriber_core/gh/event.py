"""The triggering GitHub Actions event, passed explicitly through the pipeline."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EventContext:
    event_name: str
    payload: dict = field(default_factory=dict)
    repository: str = ""

    @property
    def action(self) -> str | None:
        return self.payload.get("action")

    @property
    def pull_request(self) -> dict | None:
        return self.payload.get("pull_request")

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> EventContext:
        """Build the context from the variables the Actions runner sets.

        A missing or unreadable ``GITHUB_EVENT_PATH`` yields an empty payload;
        validation later reports what is missing.
        """
        env = os.environ if environ is None else environ
        payload: dict = {}
        event_path = env.get("GITHUB_EVENT_PATH")
        if event_path:
            path = Path(event_path)
            try:
                payload = json.loads(path.read_text(encoding="utf-8")) or {}
            except (OSError, ValueError) as e:
                logger.warning("Could not read event payload from %s: %s", event_path, e)
        return cls(
            event_name=env.get("GITHUB_EVENT_NAME", ""),
            payload=payload,
            repository=env.get("GITHUB_REPOSITORY", ""),
        )
