from __future__ import annotations

import logging
from collections.abc import Sequence

from github import Auth, Github

from prdescriber_core.errors import AdapterError
from prdescriber_core.utils.diff_filter import filter_diff

logger = logging.getLogger(__name__)

DIFF_MEDIA_TYPE = "application/vnd.github.v3.diff"


def get_repo(repo_name: str, token: str):
    # retry=None: a single failed request is final. lazy=True: the first request
    # is made by one of the adapters below, so its failure gets their prefix.
    return Github(auth=Auth.Token(token), retry=None).get_repo(repo_name, lazy=True)


def _fetch_raw_diff(repo, base_sha: str, head_sha: str) -> str:
    """GET the compare endpoint with the diff media type and return the body text.

    PyGithub's requester wraps non-JSON bodies as ``{"data": <text>}`` and
    returns None for an empty body.
    """
    _, data = repo.requester.requestJsonAndCheck(
        "GET",
        f"{repo.url}/compare/{base_sha}...{head_sha}",
        headers={"Accept": DIFF_MEDIA_TYPE},
    )
    if not data:
        return ""
    return data["data"]


def generate_diff(repo, base_sha: str, head_sha: str, ignore_patterns: Sequence[str] = ()) -> str:
    try:
        logger.info("Generating diff using GitHub API...")
        raw_diff = _fetch_raw_diff(repo, base_sha, head_sha)
        filtered = filter_diff(raw_diff, ignore_patterns)

        logger.info("Raw diff lines: %d", len(raw_diff.split("\n")))
        logger.info("Filtered diff lines: %d", len(filtered.split("\n")))
        return filtered
    except Exception as e:
        raise AdapterError("generate diff", e) from e


def summarize_commit(sha: str, message: str | None) -> str:
    """Render one commit as ``<short sha> <subject line>``."""
    subject = (message or "").split("\n")[0]
    return f"{sha[:7]} {subject}"


def get_commit_messages(repo, pr_number: int) -> str:
    try:
        logger.info("Getting commit messages using GitHub API...")
        commits = repo.get_pull(pr_number).get_commits()
        commit_messages = "\n".join(summarize_commit(c.sha, c.commit.message) for c in commits)
        logger.info("Commit Messages: %s", commit_messages)
        return commit_messages
    except Exception as e:
        raise AdapterError("get commit messages", e) from e


def update_pr_description(repo, pr_number: int, description: str) -> None:
    try:
        logger.info("Updating PR description...")
        repo.get_pull(pr_number).edit(body=description)
        logger.info("PR description updated successfully!")
    except Exception as e:
        raise AdapterError("update PR description", e) from e
