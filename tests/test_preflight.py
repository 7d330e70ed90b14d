"""
Tests for core.preflight - network and disk space checks.
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import unittest
from unittest import mock

import requests

from core.config import RunnerConfig
from core.errors import PreflightError
from core.preflight import check_network, check_disk_space, run_preflight


def usage(free_kb):
    return mock.Mock(total=0, used=0, free=free_kb * 1024)


class TestCheckNetwork(unittest.TestCase):

    @mock.patch("core.preflight.requests.head")
    def test_reachable(self, head):
        head.return_value = mock.Mock(status_code=204)
        check_network("http://example.com", timeout=3)
        head.assert_called_once_with("http://example.com", timeout=3, allow_redirects=False)

    @mock.patch("core.preflight.requests.head")
    def test_any_http_status_counts_as_connected(self, head):
        head.return_value = mock.Mock(status_code=503)
        check_network("http://example.com")

    @mock.patch("core.preflight.requests.head")
    def test_unreachable(self, head):
        head.side_effect = requests.ConnectionError("no route")
        with self.assertRaises(PreflightError) as ctx:
            check_network("http://example.com")
        self.assertEqual(str(ctx.exception), "No internet connection available")
        self.assertEqual(ctx.exception.exit_code, 1)

    @mock.patch("core.preflight.requests.head")
    def test_timeout(self, head):
        head.side_effect = requests.Timeout()
        with self.assertRaises(PreflightError):
            check_network("http://example.com")


class TestCheckDiskSpace(unittest.TestCase):

    @mock.patch("core.preflight.shutil.disk_usage")
    def test_enough_space(self, disk_usage):
        disk_usage.return_value = usage(2000000)
        self.assertEqual(check_disk_space(Path("/var"), 1000000), 2000000)

    @mock.patch("core.preflight.shutil.disk_usage")
    def test_exactly_required_is_enough(self, disk_usage):
        disk_usage.return_value = usage(1000000)
        check_disk_space(Path("/var"), 1000000)

    @mock.patch("core.preflight.shutil.disk_usage")
    def test_insufficient_space(self, disk_usage):
        disk_usage.return_value = usage(500)
        with self.assertRaises(PreflightError) as ctx:
            check_disk_space(Path("/var"), 1000000)
        self.assertEqual(
            str(ctx.exception),
            "Insufficient disk space. Required: 1000000KB, Available: 500KB",
        )

    @mock.patch("core.preflight.shutil.disk_usage")
    def test_missing_path(self, disk_usage):
        disk_usage.side_effect = FileNotFoundError("no such directory")
        with self.assertRaises(PreflightError):
            check_disk_space(Path("/nonexistent"), 1)


class TestRunPreflight(unittest.TestCase):

    @mock.patch("core.preflight.shutil.disk_usage")
    @mock.patch("core.preflight.requests.head")
    def test_network_checked_before_disk(self, head, disk_usage):
        head.side_effect = requests.ConnectionError()
        with self.assertRaises(PreflightError):
            run_preflight(RunnerConfig())
        disk_usage.assert_not_called()

    @mock.patch("core.preflight.shutil.disk_usage")
    @mock.patch("core.preflight.requests.head")
    def test_uses_config_values(self, head, disk_usage):
        head.return_value = mock.Mock(status_code=200)
        disk_usage.return_value = usage(10)
        config = RunnerConfig(
            network_check_url="http://mirror.local",
            network_timeout=2,
            disk_check_path=Path("/srv/cache"),
            required_space_kb=5,
        )
        run_preflight(config)
        head.assert_called_once_with("http://mirror.local", timeout=2, allow_redirects=False)
        disk_usage.assert_called_once_with(Path("/srv/cache"))


if __name__ == "__main__":
    unittest.main()
