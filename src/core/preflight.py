"""
Weekly Update Runner - Pre-flight Checks
Validates network and disk space before any package state is changed.
"""

import logging
import shutil
from pathlib import Path

import requests

from core.config import RunnerConfig
from core.errors import PreflightError

logger = logging.getLogger(__name__)


def check_network(url: str, timeout: float = 10) -> None:
    """
    Verify internet connectivity.

    Any HTTP response counts as connected; only transport errors fail.

    Raises:
        PreflightError: if the URL cannot be reached
    """
    try:
        response = requests.head(url, timeout=timeout, allow_redirects=False)
    except requests.RequestException as e:
        logger.debug(f"Network check against {url} failed: {e}")
        raise PreflightError("No internet connection available") from e
    logger.debug(f"Network check: {url} answered {response.status_code}")


def get_available_space_kb(path: Path) -> int:
    """Free space available at path, in KB."""
    return shutil.disk_usage(path).free // 1024


def check_disk_space(path: Path, required_kb: int) -> int:
    """
    Verify sufficient disk space is available.

    Args:
        path: Directory whose filesystem receives the downloads
        required_kb: Minimum free space in KB

    Returns:
        Available space in KB

    Raises:
        PreflightError: if space is short or cannot be determined
    """
    try:
        available = get_available_space_kb(path)
    except OSError as e:
        raise PreflightError(f"Cannot determine free disk space at {path}: {e}") from e

    if available < required_kb:
        raise PreflightError(
            f"Insufficient disk space. Required: {required_kb}KB, Available: {available}KB"
        )
    return available


def run_preflight(config: RunnerConfig) -> None:
    """
    Run all pre-update checks.

    Raises:
        PreflightError: on the first failing check
    """
    check_network(config.network_check_url, config.network_timeout)
    available = check_disk_space(config.disk_check_path, config.required_space_kb)
    logger.info(f"Pre-update checks passed ({available}KB free)")
