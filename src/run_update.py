#!/usr/bin/env python3
"""
Weekly Update Runner - Update Script
Runs the system update once it is due. Takes no arguments.
"""

import sys
import os

# Add src to path
src_dir = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, src_dir)

from core.config import load_config
from core.logging_setup import buffered_logging, setup_logging
from core.runner import UpdateRunner


def main() -> int:
    """Run the update if due and return the process exit code."""
    # Config warnings are held until the log file from the config is open
    with buffered_logging() as pending:
        config = load_config()
    setup_logging(config.log_file, config.log_level, pending)
    return UpdateRunner.from_config(config).run()


if __name__ == "__main__":
    sys.exit(main())
