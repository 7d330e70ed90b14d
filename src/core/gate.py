"""
Weekly Update Runner - Update Gate
Decides whether an update cycle is due from the last successful run.
"""

import logging
import os
import tempfile
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from core.config import DEFAULT_THRESHOLD_SECONDS

logger = logging.getLogger(__name__)


class GateState(Enum):
    """Outcome of the gate check."""
    NOT_DUE = "not_due"
    DUE = "due"


@dataclass
class GateDecision:
    """Result of checking the run record against the clock."""
    due: bool
    last_run: Optional[int] = None
    next_run: Optional[int] = None

    @property
    def state(self) -> GateState:
        return GateState.DUE if self.due else GateState.NOT_DUE


def is_due(now: int, last_run: Optional[int], threshold: int = DEFAULT_THRESHOLD_SECONDS) -> bool:
    """
    Check if enough time has passed since the last successful run.

    Args:
        now: Current Unix time in seconds
        last_run: Unix time of the last successful run, None if never run
        threshold: Seconds that must strictly elapse between runs

    Returns:
        True if an update cycle should run now
    """
    if last_run is None:
        return True
    return now - last_run > threshold


class RunRecord:
    """
    The persisted timestamp of the last successful update cycle.

    Stored as a single line holding an integer Unix timestamp.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def read(self) -> Optional[int]:
        """
        Read the stored timestamp.

        Returns:
            The timestamp, or None if the record is missing or unusable.
            Unusable records are logged, never raised.
        """
        if not self.path.exists():
            return None
        try:
            text = self.path.read_text().strip()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Cannot read run record {self.path}: {e}")
            return None

        try:
            value = int(text)
        except ValueError:
            logger.warning(f"Run record {self.path} is corrupt: {text[:40]!r}")
            return None

        if value < 0:
            logger.warning(f"Run record {self.path} holds a negative timestamp: {value}")
            return None
        return value

    def write(self, timestamp: int) -> None:
        """
        Atomically replace the stored timestamp.

        Raises:
            OSError: if the record cannot be written
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            prefix=self.path.name + ".", suffix=".tmp", dir=str(self.path.parent)
        )
        try:
            with os.fdopen(fd, "w") as f:
                f.write(f"{int(timestamp)}\n")
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except OSError:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise


class UpdateGate:
    """Two-state gate between NOT_DUE and DUE, driven by wall-clock time."""

    def __init__(
        self,
        record: RunRecord,
        threshold: int = DEFAULT_THRESHOLD_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize the gate.

        Args:
            record: Store holding the last successful run
            threshold: Seconds between update cycles
            clock: Source of the current Unix time
        """
        self.record = record
        self.threshold = threshold
        self._clock = clock

    def now(self) -> int:
        return int(self._clock())

    def check(self, now: Optional[int] = None) -> GateDecision:
        """
        Read the run record and decide whether an update is due.

        Any problem reading the record makes the update due.
        """
        now = self.now() if now is None else now
        last_run = self.record.read()

        if last_run is not None and last_run > now:
            logger.warning(
                f"Run record {self.record.path} is in the future ({last_run} > {now}), "
                "treating update as due"
            )
            last_run = None

        if last_run is None:
            return GateDecision(due=True)

        return GateDecision(
            due=is_due(now, last_run, self.threshold),
            last_run=last_run,
            next_run=last_run + self.threshold,
        )

    def record_success(self, now: Optional[int] = None) -> bool:
        """
        Persist the time of a successful update cycle.

        Returns:
            True if the record was written. A failed write is only a warning.
        """
        now = self.now() if now is None else now
        try:
            self.record.write(now)
        except OSError as e:
            logger.warning(f"Failed to save run record {self.record.path}: {e}")
            return False
        logger.debug(f"Recorded successful run at {now}")
        return True
