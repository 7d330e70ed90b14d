"""
Weekly Update Runner - Runner
Ties the gate, pre-flight checks and update sequence together.
"""

import logging
from typing import Callable, Optional

from core.config import RunnerConfig
from core.errors import UpdateError
from core.gate import UpdateGate, RunRecord
from core.notifications import NotificationManager, format_timestamp
from core.preflight import run_preflight
from core.sequence import UpdateSequence
from plugins import APTPlugin, FlatpakPlugin

logger = logging.getLogger(__name__)


class UpdateRunner:
    """
    One invocation of the weekly update.

    Returns a process exit code from run(): 0 when not due or when the
    update succeeded, non-zero otherwise.
    """

    def __init__(
        self,
        config: RunnerConfig,
        gate: UpdateGate,
        sequence: UpdateSequence,
        notifier: NotificationManager,
        preflight: Callable[[RunnerConfig], None] = run_preflight,
    ):
        self.config = config
        self.gate = gate
        self.sequence = sequence
        self.notifier = notifier
        self.preflight = preflight

    @classmethod
    def from_config(cls, config: RunnerConfig) -> "UpdateRunner":
        """Build a runner wired to the real package managers."""
        plugin_config = config.plugin_config()
        return cls(
            config=config,
            gate=UpdateGate(RunRecord(config.last_run_file), config.threshold_seconds),
            sequence=UpdateSequence(
                APTPlugin(plugin_config),
                FlatpakPlugin(plugin_config),
                flatpak_enabled=config.flatpak_enabled,
            ),
            notifier=NotificationManager(enabled=config.notifications_enabled),
        )

    def run(self, now: Optional[int] = None) -> int:
        """Run the update if it is due."""
        try:
            return self._run(now)
        except UpdateError as e:
            return self._fail(f"Error: {e}", e.exit_code)
        except Exception:
            logger.exception("Error: Unexpected failure during update")
            self.notifier.notify_update_failed(self.config.log_file)
            return 1

    def _run(self, now: Optional[int]) -> int:
        decision = self.gate.check(now)
        if not decision.due:
            self._report_not_due(decision.last_run, decision.next_run)
            return 0

        logger.info("Update started")
        logger.info("Performing pre-update checks...")
        self.preflight(self.config)
        self.sequence.run()

        logger.info("System update completed successfully!")
        self.notifier.notify_update_complete()

        # The update already succeeded, so a failed write is only a warning
        self.gate.record_success(now)
        return 0

    def _report_not_due(self, last_run: int, next_run: int) -> None:
        logger.info("System update not needed yet.")
        logger.info(f"Last update was on: {format_timestamp(last_run)}")
        logger.info(f"Next update scheduled for: {format_timestamp(next_run)}")
        self.notifier.notify_not_due(last_run, next_run)

    def _fail(self, message: str, exit_code: int) -> int:
        logger.error(message)
        self.notifier.notify_update_failed(self.config.log_file)
        return exit_code
