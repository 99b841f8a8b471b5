import io

import pytest
from rich.console import Console

from autoinstall.errors import InstallError


class FakeRegistry:
    """Stands in for NpmRegistry; records every probe and install."""

    def __init__(self, installed=(), failing=()):
        self.installed = set(installed)
        self.failing = set(failing)
        self.probes = []
        self.installs = []

    def is_installed(self, package):
        self.probes.append(package)
        return package in self.installed

    def install(self, package):
        self.installs.append(package)
        if package in self.failing:
            raise InstallError(package, "Command failed with exit code 1")
        self.installed.add(package)


@pytest.fixture
def registry():
    return FakeRegistry()


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=200, color_system=None, highlight=False)


def output_of(console):
    return console.file.getvalue()
