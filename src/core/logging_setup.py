"""
Weekly Update Runner - Logging
Timestamped log lines to the console and an append-only log file.
"""

import logging
import logging.handlers
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

LOG_FORMAT = "[%(asctime)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@contextmanager
def buffered_logging(capacity: int = 1000) -> Iterator[List[logging.LogRecord]]:
    """
    Hold records logged before the log file is known.

    Yields the list of captured records, to be passed to setup_logging().
    """
    root = logging.getLogger()
    saved_level = root.level
    handler = logging.handlers.BufferingHandler(capacity)
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)
    try:
        yield handler.buffer
    finally:
        root.removeHandler(handler)
        root.setLevel(saved_level)


def setup_logging(
    log_file: Path,
    level: str = "INFO",
    pending: Optional[Iterable[logging.LogRecord]] = None,
) -> logging.Logger:
    """
    Configure the root logger.

    The file receives everything down to DEBUG, including package manager
    output; the console only shows the configured level.

    Args:
        log_file: Append-only log file
        level: Console log level name
        pending: Records captured by buffered_logging() to write out now

    Returns:
        The configured root logger
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    console.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    root.addHandler(console)

    try:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    except OSError as e:
        root.warning(f"Cannot open log file {log_file}, logging to console only: {e}")
    else:
        file_handler.setFormatter(formatter)
        file_handler.setLevel(logging.DEBUG)
        root.addHandler(file_handler)

    # Keep third-party chatter out of the update log
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    for record in pending or ():
        root.handle(record)

    return root
