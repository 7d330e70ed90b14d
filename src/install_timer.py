#!/usr/bin/env python3
"""
Weekly Update Runner - Timer Setup
Usage: install_timer.py [enable|disable|status]
"""

import sys
import os

# Add src to path
src_dir = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, src_dir)

import logging

from core.scheduler import Scheduler


def main(argv=None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    argv = sys.argv[1:] if argv is None else argv
    action = argv[0] if argv else "enable"
    scheduler = Scheduler()

    if action == "enable":
        return 0 if scheduler.enable() else 1
    if action == "disable":
        return 0 if scheduler.disable() else 1
    if action == "status":
        for key, value in scheduler.get_status().items():
            print(f"{key}: {value}")
        return 0

    print(__doc__.strip().splitlines()[-1], file=sys.stderr)
    return 2


if __name__ == "__main__":
    sys.exit(main())
