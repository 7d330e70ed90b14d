"""
Weekly Update Runner - APT Plugin
Drives the native Debian/Ubuntu package manager.
"""

import logging

from .base import PackageManagerPlugin, StepResult

logger = logging.getLogger(__name__)


class APTPlugin(PackageManagerPlugin):
    """Plugin for upgrading and cleaning native APT packages."""

    @property
    def name(self) -> str:
        return "APT"

    @property
    def binary(self) -> str:
        return "apt"

    @property
    def environment(self) -> dict:
        return {"DEBIAN_FRONTEND": "noninteractive"}

    def refresh_package_list(self) -> StepResult:
        """Run apt update to refresh package lists."""
        return self._run("update", use_sudo=True)

    def upgrade(self) -> StepResult:
        """Upgrade installed packages without removing any."""
        return self._run("upgrade", "-y", use_sudo=True)

    def full_upgrade(self) -> StepResult:
        """Upgrade packages, installing or removing dependencies as needed."""
        return self._run("full-upgrade", "-y", use_sudo=True)

    def autoremove(self) -> StepResult:
        """Remove packages that were installed as dependencies and are no longer needed."""
        return self._run("autoremove", "-y", use_sudo=True)

    def clean(self) -> StepResult:
        """Clear the local repository of retrieved package files."""
        return self._run("clean", use_sudo=True)
