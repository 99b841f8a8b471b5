from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Sequence

from .console import ask_yes_no, status
from .errors import InstallError, LedgerError
from .ledger import Ledger


class Outcome(str, Enum):
    ALREADY_SATISFIED = "already_satisfied"
    NEEDS_INSTALL = "needs_install"
    SKIPPED_BY_USER = "skipped_by_user"
    INSTALL_FAILED = "install_failed"
    INSTALL_SUCCEEDED = "install_succeeded"


@dataclass
class PackageResult:
    package: str
    outcome: Outcome
    detail: str | None = None


@dataclass
class FileReport:
    document: str
    pending: list[str] = field(default_factory=list)
    results: list[PackageResult] = field(default_factory=list)
    error: str | None = None  # set when the document itself could not be processed

    @property
    def noop(self) -> bool:
        return self.error is None and not self.pending

    @property
    def failed(self) -> bool:
        return self.error is not None

    def count(self, outcome: Outcome) -> int:
        return sum(1 for r in self.results if r.outcome == outcome)


class Installer:
    def __init__(
        self,
        registry,
        ledger: Ledger,
        console,
        *,
        confirm: bool = False,
        prompt: Callable[[str], bool] | None = None,
        logger=None,
    ):
        self.registry = registry
        self.ledger = ledger
        self.console = console
        self.confirm = confirm
        self.prompt = prompt or (lambda q: ask_yes_no(console, q))
        self.logger = logger

    def _log(self, level: str, msg: str):
        if self.logger:
            self.logger.log(level, msg)

    def _result(self, report: FileReport, package: str, outcome: Outcome, detail: str | None = None):
        report.results.append(PackageResult(package, outcome, detail))
        if self.logger:
            self.logger.log_install(document=report.document, package=package,
                                    outcome=outcome.value, detail=detail)

    def install_all(self, document: str, pending: list[str], satisfied: Sequence[str] = ()) -> FileReport:
        report = FileReport(document=document, pending=list(pending))
        for pkg in satisfied:
            report.results.append(PackageResult(pkg, Outcome.ALREADY_SATISFIED))
        if not pending:
            status(self.console, "noop", f"No packages need to be installed for file: {document}")
            self._log("INFO", f"{document}: nothing to install")
            return report

        for pkg in pending:
            if self.confirm and not self.prompt(f"Install package {pkg}? (yes/no): "):
                status(self.console, "skip", f"Skipping installation of {pkg}")
                self._log("INFO", f"Skipped {pkg} at user request")
                self._result(report, pkg, Outcome.SKIPPED_BY_USER)
                continue

            status(self.console, "installing", f"Package {pkg} is not installed. Installing...")
            try:
                self.registry.install(pkg)
            except InstallError as e:
                status(self.console, "failure", str(e))
                self._log("ERROR", str(e))
                self._result(report, pkg, Outcome.INSTALL_FAILED, e.reason)
                continue

            status(self.console, "success", f"Successfully installed {pkg}")
            self._log("INFO", f"Installed {pkg}")
            detail = None
            try:
                self.ledger.record(pkg)
            except LedgerError as e:
                detail = str(e)
                status(self.console, "failure", detail)
                self._log("WARN", detail)
            self._result(report, pkg, Outcome.INSTALL_SUCCEEDED, detail)
        return report
