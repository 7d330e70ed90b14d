"""
Weekly Update Runner - Flatpak Plugin
Handles updates for Flatpak applications and runtimes.
"""

import logging

from .base import PackageManagerPlugin, StepResult

logger = logging.getLogger(__name__)


class FlatpakPlugin(PackageManagerPlugin):
    """Plugin for updating Flatpak applications."""

    @property
    def name(self) -> str:
        return "Flatpak"

    @property
    def binary(self) -> str:
        return "flatpak"

    def update_all(self) -> StepResult:
        """
        Update all Flatpak applications and runtimes at once.

        Flatpak manages its own privileges, so no privilege command is used.
        """
        return self._run("update", "-y")
