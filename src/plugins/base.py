"""
Weekly Update Runner - Plugin Base
Abstract base class for package manager plugins.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional
import logging
import os
import subprocess

logger = logging.getLogger(__name__)


@dataclass
class StepResult:
    """Result of a single package manager invocation."""
    success: bool
    exit_code: Optional[int] = None      # None if the command never exited (timeout, not found)
    error_message: Optional[str] = None
    output: str = ""


class PackageManagerPlugin(ABC):
    """
    Abstract base class for package manager plugins.

    Each plugin wraps one command line tool (apt, flatpak, ...) and
    exposes the operations the update sequence needs as methods that
    return a StepResult. Plugins never raise on command failure.
    """

    def __init__(self, config: dict = None):
        """
        Initialize the plugin.

        Args:
            config: Optional configuration dict. Recognised keys are
                   'privilege_command' (list) and 'timeout' (seconds).
        """
        self.config = config or {}
        self.privilege_command = list(self.config.get("privilege_command", []))
        self.timeout = self.config.get("timeout", 1800)
        self._available: Optional[bool] = None

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of the plugin (e.g., 'APT')."""
        pass

    @property
    @abstractmethod
    def binary(self) -> str:
        """Executable the plugin drives (e.g., 'apt')."""
        pass

    @property
    def environment(self) -> dict:
        """Extra environment variables for every invocation."""
        return {}

    def is_available(self) -> bool:
        """Check if the tool is installed on this system."""
        if self._available is None:
            try:
                result = subprocess.run(
                    ["which", self.binary],
                    capture_output=True,
                    timeout=5,
                )
                self._available = result.returncode == 0
            except (OSError, subprocess.TimeoutExpired):
                self._available = False
            if not self._available:
                logger.info(f"{self.name} not available on this system")
        return self._available

    def _run(self, *args, use_sudo: bool = False, timeout: Optional[int] = None) -> StepResult:
        """
        Run the tool with the given arguments.

        Args:
            args: Arguments passed after the binary name
            use_sudo: Prefix the command with the privilege command
            timeout: Seconds before the command is abandoned

        Returns:
            StepResult describing the outcome.
        """
        cmd = [self.binary] + list(args)
        if use_sudo:
            cmd = self.privilege_command + cmd
        timeout = timeout or self.timeout

        logger.debug(f"Running: {' '.join(cmd)}")
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=timeout,
                env={**os.environ, **self.environment},
            )
        except FileNotFoundError:
            return StepResult(success=False, error_message=f"{cmd[0]} not found")
        except subprocess.TimeoutExpired:
            logger.warning(f"{self.name} command timed out after {timeout}s: {' '.join(cmd)}")
            return StepResult(
                success=False,
                error_message=f"Timed out after {timeout} seconds",
            )

        for line in result.stdout.splitlines():
            logger.debug(line)

        if result.returncode == 0:
            return StepResult(success=True, exit_code=0, output=result.stdout)

        stderr = result.stderr.strip()
        for line in stderr.splitlines():
            logger.error(line)
        return StepResult(
            success=False,
            exit_code=result.returncode,
            error_message=stderr or f"{self.binary} {args[0]} failed",
            output=result.stdout,
        )
