"""Drop ignored files from a unified diff.

A diff is cut into per-file sections just before every ``diff --git `` marker.
Each section keeps its own header line and trailing newlines, so joining the
survivors back together needs no separator.

Patterns use the minimatch dialect via wcmatch: ``*`` stays within one path
segment, ``**`` crosses segments, brace/extglob expansion is enabled, and a
leading ``!`` negates the pattern.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from wcmatch import glob

logger = logging.getLogger(__name__)

HEADER_PREFIX = "diff --git a/"
_PATH_SEPARATOR = " b/"
_SECTION_SPLIT_RE = re.compile(r"(?=diff --git )")
# NEGATEALL: a lone "!pattern" matches every path the pattern does not.
_GLOB_FLAGS = glob.GLOBSTAR | glob.BRACE | glob.EXTGLOB | glob.NEGATE | glob.NEGATEALL


def is_ignored(file_path: str, patterns: Sequence[str]) -> bool:
    """Return True if file_path matches any of the glob patterns."""
    return any(glob.globmatch(file_path, pattern, flags=_GLOB_FLAGS) for pattern in patterns)


def split_sections(diff: str) -> list[str]:
    """Split a diff into its non-blank sections, headers included."""
    return [section for section in _SECTION_SPLIT_RE.split(diff) if section.strip()]


def parse_header_path(header_line: str) -> str | None:
    """Return the ``a/`` side path of a ``diff --git`` header, or None if malformed."""
    after_a = header_line[len(HEADER_PREFIX) :]
    b_index = after_a.find(_PATH_SEPARATOR)
    if b_index <= 0:
        return None
    return after_a[:b_index]


def filter_diff(diff: str, patterns: Sequence[str]) -> str:
    """Remove every file section whose path matches one of ``patterns``.

    With no patterns the diff is returned untouched. Otherwise blank sections
    are dropped, text that is not a file section (e.g. a preamble) is kept
    verbatim, and sections with an unparseable header are dropped with a warning.
    """
    if not patterns:
        return diff

    kept: list[str] = []
    removed = 0

    for section in split_sections(diff):
        first_line = section.split("\n", 1)[0]

        if not first_line.startswith(HEADER_PREFIX):
            kept.append(section)
            continue

        file_path = parse_header_path(first_line)
        if file_path is None:
            logger.warning("Could not parse diff header: %s", first_line)
            continue

        if is_ignored(file_path, patterns):
            removed += 1
            logger.info("Ignoring file: %s", file_path)
            continue

        kept.append(section)

    if removed > 0:
        logger.info("Filtered out %d files from ignored patterns", removed)

    return "".join(kept)
