"""
Weekly Update Runner - Update Sequence
Runs the fixed list of package manager steps, stopping at the first failure.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from plugins import APTPlugin, FlatpakPlugin, StepResult
from core.errors import StepFailedError

logger = logging.getLogger(__name__)


@dataclass
class Step:
    """One package manager invocation in the sequence."""
    name: str
    message: str                      # Logged when the step starts
    action: Callable[[], StepResult]


class UpdateSequence:
    """
    Strictly ordered update and cleanup steps.

    Update: package index, safe upgrade, full upgrade, Flatpak.
    Cleanup: orphaned packages, package cache.
    """

    def __init__(
        self,
        apt: APTPlugin,
        flatpak: Optional[FlatpakPlugin] = None,
        flatpak_enabled: bool = True,
    ):
        """
        Initialize the sequence.

        Args:
            apt: Plugin driving the system package manager
            flatpak: Plugin driving Flatpak, None to never update Flatpaks
            flatpak_enabled: Configuration switch for the Flatpak step
        """
        self.apt = apt
        self.flatpak = flatpak
        self.flatpak_enabled = flatpak_enabled

    def _use_flatpak(self) -> bool:
        if self.flatpak is None or not self.flatpak_enabled:
            logger.info("Flatpak update disabled, skipping")
            return False
        if not self.flatpak.is_available():
            logger.info("Flatpak not installed, skipping")
            return False
        return True

    def build_steps(self) -> list[Step]:
        """Build the ordered step list for this host."""
        steps = [
            Step("apt update", "Updating package index...", self.apt.refresh_package_list),
            Step("apt upgrade", "Performing safe upgrade...", self.apt.upgrade),
            Step("apt full-upgrade", "Performing full upgrade...", self.apt.full_upgrade),
        ]
        if self._use_flatpak():
            steps.append(
                Step("flatpak update", "Updating Flatpak applications...", self.flatpak.update_all)
            )
        steps += [
            Step("apt autoremove", "Removing orphaned packages...", self.apt.autoremove),
            Step("apt clean", "Cleaning package cache...", self.apt.clean),
        ]
        return steps

    def run(self) -> list[str]:
        """
        Run every step in order.

        Returns:
            Names of the steps that ran

        Raises:
            StepFailedError: on the first failing step; later steps do not run
        """
        completed = []
        for step in self.build_steps():
            logger.info(step.message)
            result = step.action()
            if not result.success:
                raise StepFailedError(step.name, result.exit_code, result.error_message)
            completed.append(step.name)
        return completed
