"""
Tests for plugins - StepResult and the apt/flatpak command wrappers.
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import subprocess
import unittest
from unittest import mock

from plugins.base import StepResult, PackageManagerPlugin
from plugins.apt import APTPlugin
from plugins.flatpak import FlatpakPlugin


def completed(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class TestStepResult(unittest.TestCase):
    """Tests for StepResult dataclass."""

    def test_defaults(self):
        r = StepResult(success=True)
        self.assertIsNone(r.exit_code)
        self.assertIsNone(r.error_message)
        self.assertEqual(r.output, "")


class TestPackageManagerPluginDefaults(unittest.TestCase):
    """Tests for PackageManagerPlugin default behavior."""

    class DummyPlugin(PackageManagerPlugin):
        name = "Dummy"
        binary = "dummy"

    def test_default_config(self):
        plugin = self.DummyPlugin()
        self.assertEqual(plugin.privilege_command, [])
        self.assertEqual(plugin.timeout, 1800)
        self.assertEqual(plugin.environment, {})

    @mock.patch("plugins.base.subprocess.run")
    def test_is_available_cached(self, run):
        run.return_value = completed(0)
        plugin = self.DummyPlugin()
        self.assertTrue(plugin.is_available())
        self.assertTrue(plugin.is_available())
        run.assert_called_once()
        self.assertEqual(run.call_args[0][0], ["which", "dummy"])

    @mock.patch("plugins.base.subprocess.run")
    def test_is_available_missing(self, run):
        run.return_value = completed(1)
        self.assertFalse(self.DummyPlugin().is_available())

    @mock.patch("plugins.base.subprocess.run", side_effect=FileNotFoundError)
    def test_binary_not_found(self, run):
        result = self.DummyPlugin()._run("go")
        self.assertFalse(result.success)
        self.assertIsNone(result.exit_code)
        self.assertIn("not found", result.error_message)

    @mock.patch("plugins.base.subprocess.run")
    def test_timeout(self, run):
        run.side_effect = subprocess.TimeoutExpired(cmd="dummy", timeout=5)
        result = self.DummyPlugin({"timeout": 5})._run("go")
        self.assertFalse(result.success)
        self.assertIsNone(result.exit_code)
        self.assertEqual(result.error_message, "Timed out after 5 seconds")

    @mock.patch("plugins.base.subprocess.run")
    def test_nonzero_exit(self, run):
        run.return_value = completed(3, stdout="partial", stderr="E: failure\n")
        result = self.DummyPlugin()._run("go")
        self.assertFalse(result.success)
        self.assertEqual(result.exit_code, 3)
        self.assertEqual(result.error_message, "E: failure")
        self.assertEqual(result.output, "partial")

    @mock.patch("plugins.base.subprocess.run")
    def test_output_logged_at_debug(self, run):
        run.return_value = completed(0, stdout="line one\nline two\n")
        with self.assertLogs("plugins.base", level="DEBUG") as logs:
            self.DummyPlugin()._run("go")
        self.assertTrue(any("line two" in line for line in logs.output))


class TestAPTPlugin(unittest.TestCase):
    """Tests for APTPlugin commands."""

    def setUp(self):
        self.plugin = APTPlugin({"privilege_command": ["sudo"], "timeout": 60})

    def _command_for(self, method):
        with mock.patch("plugins.base.subprocess.run", return_value=completed(0)) as run:
            result = getattr(self.plugin, method)()
        self.assertTrue(result.success)
        return run.call_args

    def test_commands(self):
        expected = {
            "refresh_package_list": ["sudo", "apt", "update"],
            "upgrade": ["sudo", "apt", "upgrade", "-y"],
            "full_upgrade": ["sudo", "apt", "full-upgrade", "-y"],
            "autoremove": ["sudo", "apt", "autoremove", "-y"],
            "clean": ["sudo", "apt", "clean"],
        }
        for method, cmd in expected.items():
            self.assertEqual(self._command_for(method)[0][0], cmd, method)

    def test_noninteractive_environment(self):
        kwargs = self._command_for("upgrade")[1]
        self.assertEqual(kwargs["env"]["DEBIAN_FRONTEND"], "noninteractive")
        self.assertIn("PATH", kwargs["env"])
        self.assertEqual(kwargs["timeout"], 60)

    def test_failure_carries_exit_code(self):
        with mock.patch("plugins.base.subprocess.run", return_value=completed(100, stderr="E: Could not get lock")):
            result = self.plugin.upgrade()
        self.assertFalse(result.success)
        self.assertEqual(result.exit_code, 100)
        self.assertIn("lock", result.error_message)

    def test_without_privilege_command(self):
        plugin = APTPlugin({"privilege_command": []})
        with mock.patch("plugins.base.subprocess.run", return_value=completed(0)) as run:
            plugin.clean()
        self.assertEqual(run.call_args[0][0], ["apt", "clean"])


class TestFlatpakPlugin(unittest.TestCase):
    """Tests for FlatpakPlugin."""

    def test_update_all_never_uses_sudo(self):
        plugin = FlatpakPlugin({"privilege_command": ["sudo"]})
        with mock.patch("plugins.base.subprocess.run", return_value=completed(0)) as run:
            result = plugin.update_all()
        self.assertTrue(result.success)
        self.assertEqual(run.call_args[0][0], ["flatpak", "update", "-y"])

    def test_update_all_failure(self):
        with mock.patch("plugins.base.subprocess.run", return_value=completed(1, stderr="error: No remote")):
            result = FlatpakPlugin().update_all()
        self.assertFalse(result.success)
        self.assertEqual(result.exit_code, 1)


if __name__ == "__main__":
    unittest.main()
