"""Tests for the npm list/install wrapper."""

from unittest.mock import patch

import pytest

from autoinstall.errors import CommandError, InstallError, ProbeError
from autoinstall.registry import NpmRegistry


class TestCommands:
    def test_list_command(self):
        assert NpmRegistry().list_command("chalk") == ["npm", "list", "chalk"]

    def test_install_command_plain_and_sudo(self):
        assert NpmRegistry().install_command("chalk") == ["npm", "install", "chalk"]
        assert NpmRegistry(sudo=True).install_command("chalk") == ["sudo", "npm", "install", "chalk"]

    def test_custom_executable(self):
        assert NpmRegistry(executable="/opt/npm").list_command("x")[0] == "/opt/npm"


class TestIsInstalled:
    def test_present_when_output_mentions_package(self):
        with patch("autoinstall.registry.run_command", return_value="proj@1.0.0\n└── chalk@5.3.0\n") as rc:
            assert NpmRegistry(cwd="/work").is_installed("chalk")
        rc.assert_called_once_with(["npm", "list", "chalk"], cwd="/work", stream=True)

    def test_absent_when_output_lacks_package(self):
        with patch("autoinstall.registry.run_command", return_value="proj@1.0.0\n└── (empty)\n"):
            assert not NpmRegistry().is_installed("chalk")

    def test_nonzero_exit_means_not_installed(self):
        err = CommandError(["npm", "list", "chalk"], 1)
        with patch("autoinstall.registry.run_command", side_effect=err):
            assert not NpmRegistry().is_installed("chalk")

    def test_missing_npm_means_not_installed(self):
        err = CommandError(["npm", "list", "chalk"], None, "No such file or directory")
        with patch("autoinstall.registry.run_command", side_effect=err):
            assert not NpmRegistry().is_installed("chalk")

    def test_query_surfaces_probe_error(self):
        err = CommandError(["npm", "list", "chalk"], 1)
        with patch("autoinstall.registry.run_command", side_effect=err):
            with pytest.raises(ProbeError):
                NpmRegistry().query("chalk")


class TestInstall:
    def test_success(self):
        with patch("autoinstall.registry.run_command", return_value="added 1 package") as rc:
            NpmRegistry(stream=False).install("chalk")
        rc.assert_called_once_with(["npm", "install", "chalk"], cwd=None, stream=False)

    def test_failure_raises_install_error_with_cause(self):
        err = CommandError(["npm", "install", "nope"], 1)
        with patch("autoinstall.registry.run_command", side_effect=err):
            with pytest.raises(InstallError) as exc:
                NpmRegistry().install("nope")
        assert exc.value.package == "nope"
        assert "exit code 1" in str(exc.value)
