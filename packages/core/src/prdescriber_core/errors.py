"""Error hierarchy for a describe run.

Every failure the pipeline can raise is one of the subclasses below.
run_describe() is the only place that turns them into a failed RunResult.
"""

from __future__ import annotations


class PRDescriberError(Exception):
    """Base class for all pr-describer failures."""


class TriggerInvalidError(PRDescriberError):
    """The triggering event or its pull request payload is unusable."""


class ConfigMissingError(PRDescriberError):
    def __init__(self, credential: str, message: str):
        super().__init__(message)
        self.credential = credential


class AdapterError(PRDescriberError):
    """A GitHub API call failed. The message keeps the underlying error text verbatim."""

    def __init__(self, operation: str, cause: BaseException):
        super().__init__(f"Failed to {operation}: {cause}")
        self.operation = operation
        self.cause = cause


class GenerationError(PRDescriberError):
    """The model call failed or returned nothing usable."""

    def __init__(self, reason: str, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.reason = reason
        self.cause = cause


class ConfigInvalidError(PRDescriberError, ValueError):
    """A configuration setting has the wrong type or value."""

    def __init__(self, setting: str, message: str):
        super().__init__(message)
        self.setting = setting
