from pathlib import Path
from typing import Optional

import yaml

from prdescriber_core.errors import ConfigInvalidError

DEFAULT_CONFIG_PATH = ".pr-describer.yml"

DEFAULT_CONFIG: dict = {
    "model": "claude-3-5-haiku-latest",
    "max_tokens": 2000,
    "ignore_patterns": [],  # minimatch-style globs, e.g. "dist/**", "**/*.lock"
}


def parse_ignore_patterns(raw: Optional[str]) -> list:
    """Split a comma-separated glob list, trimming entries and dropping blanks."""
    if not raw:
        return []
    return [p.strip() for p in raw.split(",") if p.strip()]


def normalize_settings(settings: dict) -> dict:
    """Validate setting types and coerce ``ignore_patterns`` to a list of globs.

    A string ``ignore_patterns`` is read as a comma-separated list. Raises
    ConfigInvalidError for any value of the wrong type.
    """
    normalized = dict(settings)

    patterns = normalized.get("ignore_patterns")
    if patterns is None:
        normalized["ignore_patterns"] = []
    elif isinstance(patterns, str):
        normalized["ignore_patterns"] = parse_ignore_patterns(patterns)
    elif isinstance(patterns, list) and all(isinstance(p, str) for p in patterns):
        normalized["ignore_patterns"] = [p.strip() for p in patterns if p.strip()]
    else:
        raise ConfigInvalidError(
            "ignore_patterns", "ignore_patterns must be a list of strings or a comma-separated string"
        )

    model = normalized.get("model", DEFAULT_CONFIG["model"])
    if not isinstance(model, str) or not model.strip():
        raise ConfigInvalidError("model", "model must be a non-empty string")

    max_tokens = normalized.get("max_tokens", DEFAULT_CONFIG["max_tokens"])
    # bool is an int subclass; reject `max_tokens: true`.
    if isinstance(max_tokens, bool) or not isinstance(max_tokens, int) or max_tokens <= 0:
        raise ConfigInvalidError("max_tokens", "max_tokens must be a positive integer")

    return normalized


def load_config(config_path: str = DEFAULT_CONFIG_PATH, overrides: Optional[dict] = None) -> dict:
    """
    Load file-level settings by merging (in order of precedence):
      1. Built-in defaults
      2. .pr-describer.yml in the current directory
      3. Explicit overrides (None values are ignored)

    Credentials are never read from the file; see validation.resolve_config.
    """
    config = {**DEFAULT_CONFIG, "ignore_patterns": list(DEFAULT_CONFIG["ignore_patterns"])}

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        if not isinstance(file_config, dict):
            raise ConfigInvalidError("config", f"{config_path} must contain a YAML mapping")
        config.update({k: v for k, v in file_config.items() if k in DEFAULT_CONFIG})

    if overrides:
        for key, value in overrides.items():
            if value is not None:
                config[key] = value

    return normalize_settings(config)
