from __future__ import annotations
import os
from dataclasses import dataclass, field
from pathlib import Path

from .config import Config
from .console import print_pending, status
from .errors import ReadError
from .installer import FileReport, Installer, Outcome, PackageResult
from .ledger import Ledger
from .reconciler import Reconciler
from .registry import NpmRegistry
from .utils import is_source_file


@dataclass
class RunSummary:
    files: int = 0
    unreadable: int = 0
    counts: dict[str, int] = field(default_factory=dict)

    @classmethod
    def of(cls, reports: list[FileReport]) -> "RunSummary":
        s = cls(files=len(reports))
        for rep in reports:
            if rep.failed:
                s.unreadable += 1
            for r in rep.results:
                s.counts[r.outcome.value] = s.counts.get(r.outcome.value, 0) + 1
        return s


class BatchRunner:
    def __init__(self, reconciler: Reconciler, installer: Installer, console,
                 include_ext: list[str], logger=None, dry_run: bool = False):
        self.reconciler = reconciler
        self.installer = installer
        self.console = console
        self.include_ext = set(e.lower() for e in include_ext)
        self.logger = logger
        self.dry_run = dry_run

    def _log(self, level: str, msg: str):
        if self.logger:
            self.logger.log(level, msg)

    def run_file(self, path: Path | str) -> FileReport:
        document = str(Path(path).resolve())
        try:
            rec = self.reconciler.reconcile(document)
        except ReadError as e:
            status(self.console, "failure", str(e))
            self._log("ERROR", str(e))
            return FileReport(document=document, error=e.reason)

        if rec.to_install:
            print_pending(self.console, document, rec.to_install)

        if self.dry_run:
            report = FileReport(document=document, pending=list(rec.to_install))
            report.results += [PackageResult(p, Outcome.ALREADY_SATISFIED) for p in rec.satisfied]
            report.results += [PackageResult(p, Outcome.NEEDS_INSTALL) for p in rec.to_install]
            if self.logger:
                for r in report.results:
                    self.logger.log_install(document=document, package=r.package, outcome=r.outcome.value)
            if report.noop:
                status(self.console, "noop", f"No packages need to be installed for file: {document}")
            return report
        return self.installer.install_all(document, rec.to_install, rec.satisfied)

    def source_files(self, dir_path: Path | str) -> list[Path]:
        # Listing order, deliberately unsorted.
        out: list[Path] = []
        with os.scandir(dir_path) as it:
            for entry in it:
                p = Path(entry.path)
                if entry.is_file() and is_source_file(p, self.include_ext):
                    out.append(p)
        return out

    def run_directory(self, dir_path: Path | str) -> list[FileReport]:
        reports: list[FileReport] = []
        files = self.source_files(dir_path)
        self._log("INFO", f"{dir_path}: {len(files)} source file(s)")
        for p in files:
            status(self.console, "processing", f"Processing file: {p}")
            reports.append(self.run_file(p))
            status(self.console, "processing", f"Finished processing file: {p}")
        return reports


def ledger_for(cfg: Config, target: Path, persist: bool, read_only: bool = False) -> Ledger:
    if not persist:
        return Ledger()
    base = target if target.is_dir() else target.parent
    loaded = Ledger.load(base / cfg.ledger.sidecar)
    if read_only:
        return Ledger(entries=loaded)
    return loaded


def build_runner(cfg: Config, console, *, target: Path, confirm: bool = False,
                 persist: bool | None = None, dry_run: bool = False,
                 logger=None, prompt=None) -> BatchRunner:
    persist = cfg.ledger.persist if persist is None else persist
    ledger = ledger_for(cfg, target, persist, read_only=dry_run)
    registry = NpmRegistry(
        executable=cfg.npm.executable,
        sudo=cfg.npm.sudo,
        cwd=cfg.npm.cwd,
        stream=cfg.npm.stream_output,
    )
    reconciler = Reconciler(registry, ledger, logger=logger)
    installer = Installer(registry, ledger, console, confirm=confirm, prompt=prompt, logger=logger)
    return BatchRunner(reconciler, installer, console, cfg.parsing.include_ext,
                       logger=logger, dry_run=dry_run)
