"""
Weekly Update Runner - Notifications
Native desktop notifications for update results.
"""

import logging
import subprocess
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)

APP_NAME = "Weekly Update"


def format_timestamp(timestamp: int) -> str:
    """Converts a Unix timestamp to a human readable date."""
    return datetime.fromtimestamp(timestamp).strftime("%A, %B %d at %I:%M %p")


class NotificationManager:
    """
    Sends desktop notifications when notify-send is present.

    Without notify-send, or when disabled, every call is a no-op.
    """

    def __init__(self, enabled: bool = True):
        """
        Initialize notification manager.

        Args:
            enabled: False to suppress all notifications
        """
        self.enabled = enabled
        self._has_notify_send = enabled and self._check_notify_send()

    @staticmethod
    def _check_notify_send() -> bool:
        """Check if notify-send is available."""
        try:
            result = subprocess.run(
                ["which", "notify-send"],
                capture_output=True,
                timeout=5
            )
            return result.returncode == 0
        except (OSError, subprocess.TimeoutExpired):
            return False

    @property
    def available(self) -> bool:
        return self._has_notify_send

    def notify(
        self,
        title: str,
        body: str,
        icon: str = "system-software-update",
        urgency: str = "normal",
    ) -> bool:
        """
        Send a desktop notification.

        Args:
            title: Notification title
            body: Notification body text
            icon: Icon name or path
            urgency: "low", "normal", or "critical"

        Returns:
            True if notification was sent successfully
        """
        if not self._has_notify_send:
            logger.debug("notify-send not available")
            return False

        try:
            result = subprocess.run(
                [
                    "notify-send",
                    title,
                    body,
                    "-i", icon,
                    "-u", urgency,
                    "-a", APP_NAME,
                ],
                capture_output=True,
                timeout=5,
            )
            if result.returncode != 0:
                logger.warning(f"notify-send exited with code {result.returncode}")
            return result.returncode == 0
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.warning(f"Failed to send notification: {e}")
            return False

    def notify_update_complete(self) -> bool:
        """Notify user that the whole update cycle succeeded."""
        return self.notify(
            title="System Update Complete",
            body="Your system has been successfully updated.",
            icon="emblem-ok-symbolic",
            urgency="low",
        )

    def notify_update_failed(self, log_file: Path) -> bool:
        """Notify user that the update cycle was aborted."""
        return self.notify(
            title="System Update Error",
            body=f"Update failed. Check {log_file} for details.",
            icon="dialog-error",
            urgency="critical",
        )

    def notify_not_due(self, last_run: int, next_run: int) -> bool:
        """Tell the user when the last and next update happen."""
        body = (
            "System update not needed yet.\n\n"
            f"Last update was on: {format_timestamp(last_run)}\n"
            f"Next update scheduled for: {format_timestamp(next_run)}"
        )
        return self.notify(title="Update Status", body=body, urgency="low")
