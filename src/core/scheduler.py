"""
Weekly Update Runner - Timer Installation
Runs the updater automatically via a systemd user timer.

The timer fires daily; the update gate decides whether a cycle is due,
so a missed day never delays the weekly update by more than a day.
"""

import subprocess
import logging
import sys
from pathlib import Path
from typing import Optional

from core.config import NONINTERACTIVE_ENV_VAR

logger = logging.getLogger(__name__)


class Scheduler:
    """Manages the systemd user timer that invokes the runner."""

    SERVICE_NAME = "weekly-update"
    CALENDAR_SPEC = "daily"

    def __init__(self, systemd_user_dir: Optional[Path] = None, entry_script: Optional[Path] = None):
        """
        Initialize the scheduler.

        Args:
            systemd_user_dir: Where unit files are written.
                              Defaults to ~/.config/systemd/user
            entry_script: Script the service runs. Defaults to run_update.py
        """
        self.systemd_user_dir = systemd_user_dir or (
            Path.home() / ".config" / "systemd" / "user"
        )
        self.entry_script = entry_script or Path(__file__).parent.parent / "run_update.py"
        self._service_file = self.systemd_user_dir / f"{self.SERVICE_NAME}.service"
        self._timer_file = self.systemd_user_dir / f"{self.SERVICE_NAME}.timer"

    def _systemctl(self, *args) -> Optional[subprocess.CompletedProcess]:
        try:
            return subprocess.run(
                ["systemctl", "--user"] + list(args),
                capture_output=True,
                text=True,
                timeout=10,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.error(f"systemctl {args[0]} failed: {e}")
            return None

    def service_content(self) -> str:
        return f"""[Unit]
Description=Weekly Update - System package update (needs passwordless sudo for apt)
After=network-online.target
Wants=network-online.target

[Service]
Type=oneshot
ExecStart={sys.executable} {self.entry_script}
Environment=DBUS_SESSION_BUS_ADDRESS=unix:path=/run/user/%U/bus
Environment={NONINTERACTIVE_ENV_VAR}=1
StandardOutput=journal
StandardError=journal
"""

    def timer_content(self) -> str:
        return f"""[Unit]
Description=Weekly Update - Daily Check Timer

[Timer]
OnCalendar={self.CALENDAR_SPEC}
RandomizedDelaySec=300
Persistent=true

[Install]
WantedBy=timers.target
"""

    def _write_units(self) -> bool:
        """Create the systemd service and timer files."""
        try:
            self.systemd_user_dir.mkdir(parents=True, exist_ok=True)
            self._service_file.write_text(self.service_content())
            self._timer_file.write_text(self.timer_content())
        except OSError as e:
            logger.error(f"Failed to write unit files: {e}")
            return False
        logger.info(f"Created unit files in {self.systemd_user_dir}")
        return True

    def has_passwordless_sudo(self) -> bool:
        """Check if sudo works without a password prompt, as the timer needs."""
        try:
            result = subprocess.run(
                ["sudo", "-n", "true"],
                capture_output=True,
                timeout=10,
            )
        except (OSError, subprocess.TimeoutExpired):
            return False
        return result.returncode == 0

    def is_enabled(self) -> bool:
        """Check if the update timer is enabled."""
        result = self._systemctl("is-enabled", f"{self.SERVICE_NAME}.timer")
        return result is not None and result.returncode == 0

    def is_active(self) -> bool:
        """Check if the update timer is currently active."""
        result = self._systemctl("is-active", f"{self.SERVICE_NAME}.timer")
        return result is not None and result.returncode == 0

    def get_next_run(self) -> Optional[str]:
        """Get the next scheduled run time."""
        result = self._systemctl(
            "show", f"{self.SERVICE_NAME}.timer", "--property=NextElapseUSecRealtime"
        )
        if result is not None and result.returncode == 0:
            line = result.stdout.strip()
            if "=" in line:
                return line.split("=", 1)[1]
        return None

    def enable(self) -> bool:
        """
        Install and start the timer.

        Returns:
            True if successfully enabled
        """
        if not self._write_units():
            return False

        self._systemctl("daemon-reload")
        result = self._systemctl("enable", "--now", f"{self.SERVICE_NAME}.timer")
        if result is None:
            return False
        if result.returncode != 0:
            logger.error(f"Failed to enable timer: {result.stderr.strip()}")
            return False

        logger.info("Enabled automatic updates")
        if not self.has_passwordless_sudo():
            logger.warning(
                "sudo asks for a password, so timer runs will fail at apt update. "
                "Add a NOPASSWD sudoers rule for apt or set privilege_command in the config."
            )
        return True

    def disable(self) -> bool:
        """Stop and disable the timer. Unit files are left in place."""
        result = self._systemctl("disable", "--now", f"{self.SERVICE_NAME}.timer")
        if result is None:
            return False
        logger.info("Disabled automatic updates")
        return True

    def get_status(self) -> dict:
        """Get scheduler status information."""
        return {
            "enabled": self.is_enabled(),
            "active": self.is_active(),
            "next_run": self.get_next_run(),
            "service_file": str(self._service_file),
            "timer_file": str(self._timer_file),
        }
