"""
Weekly Update Runner - Errors
Failures that abort an update run.
"""

from typing import Optional


class UpdateError(Exception):
    """Base class for failures that stop the update run."""

    exit_code = 1


class PreflightError(UpdateError):
    """A pre-update check failed; nothing on the system was changed."""


class StepFailedError(UpdateError):
    """A package manager step returned an error."""

    def __init__(self, step: str, exit_code: Optional[int] = None, detail: Optional[str] = None):
        self.step = step
        self.detail = detail
        # Propagate the sub-command's status where there is one
        if exit_code:
            self.exit_code = exit_code
        self.command_exit_code = exit_code
        if exit_code is not None:
            message = f"{step} failed with exit code {exit_code}"
        else:
            message = f"{step} failed: {detail or 'unknown error'}"
        super().__init__(message)
