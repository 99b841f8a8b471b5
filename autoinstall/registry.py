from __future__ import annotations
from dataclasses import dataclass

from .errors import CommandError, InstallError, ProbeError
from .utils import run_command


@dataclass
class NpmRegistry:
    executable: str = "npm"
    sudo: bool = False
    cwd: str | None = None
    stream: bool = True

    def list_command(self, package: str) -> list[str]:
        return [self.executable, "list", package]

    def install_command(self, package: str) -> list[str]:
        cmd = [self.executable, "install", package]
        return ["sudo", *cmd] if self.sudo else cmd

    def query(self, package: str) -> str:
        try:
            return run_command(self.list_command(package), cwd=self.cwd, stream=self.stream)
        except CommandError as e:
            raise ProbeError(package, str(e)) from e

    def is_installed(self, package: str) -> bool:
        # `npm list` exits non-zero for a missing package; that is an answer, not a failure.
        try:
            output = self.query(package)
        except ProbeError:
            return False
        return package in output

    def install(self, package: str) -> None:
        try:
            run_command(self.install_command(package), cwd=self.cwd, stream=self.stream)
        except CommandError as e:
            raise InstallError(package, str(e)) from e
