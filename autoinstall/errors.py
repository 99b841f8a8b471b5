from __future__ import annotations


class AutoInstallError(Exception):
    """Base class for everything autoinstall raises on purpose."""


class UsageError(AutoInstallError):
    pass


class ReadError(AutoInstallError):
    def __init__(self, path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Cannot read {self.path}: {reason}")


class LedgerError(AutoInstallError):
    pass


class CommandError(AutoInstallError):
    def __init__(self, cmd: list[str], returncode: int | None, reason: str = ""):
        self.cmd = list(cmd)
        self.returncode = returncode
        self.reason = reason
        if returncode is None:
            msg = f"Command {' '.join(self.cmd)!r} could not be run: {reason}"
        else:
            msg = f"Command failed with exit code {returncode}"
        super().__init__(msg)


class ProbeError(AutoInstallError):
    def __init__(self, package: str, reason: str):
        self.package = package
        self.reason = reason
        super().__init__(f"npm list {package}: {reason}")


class InstallError(AutoInstallError):
    def __init__(self, package: str, reason: str):
        self.package = package
        self.reason = reason
        super().__init__(f"Failed to install {package}: {reason}")
