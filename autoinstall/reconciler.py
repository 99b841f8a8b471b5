from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path

from .errors import LedgerError
from .ledger import Ledger
from .scanner import extract_specifiers, read_document
from .utils import is_local_specifier


@dataclass
class Reconciliation:
    document: str
    base_dir: str
    referenced: list[str] = field(default_factory=list)
    local: list[str] = field(default_factory=list)
    satisfied: list[str] = field(default_factory=list)
    to_install: list[str] = field(default_factory=list)


class Reconciler:
    """Turns the specifiers a document references into the ones npm still has to install."""

    def __init__(self, registry, ledger: Ledger, logger=None):
        self.registry = registry
        self.ledger = ledger
        self.logger = logger

    def _log(self, level: str, msg: str):
        if self.logger:
            self.logger.log(level, msg)

    def reconcile(self, path: Path | str) -> Reconciliation:
        doc = Path(path).resolve()
        base_dir = doc.parent
        text = read_document(doc)  # ReadError aborts this document only

        rec = Reconciliation(document=str(doc), base_dir=str(base_dir))
        rec.referenced = extract_specifiers(text)
        self._log("DEBUG", f"{doc}: {len(rec.referenced)} specifier(s) referenced")

        for spec in rec.referenced:
            if is_local_specifier(spec, base_dir):
                rec.local.append(spec)
                continue
            if spec in self.ledger:
                rec.satisfied.append(spec)
                continue
            if self.registry.is_installed(spec):
                try:
                    self.ledger.record(spec)
                except LedgerError as e:
                    self._log("WARN", str(e))
                rec.satisfied.append(spec)
                self._log("INFO", f"{spec} already installed (npm list)")
                continue
            rec.to_install.append(spec)

        self._log(
            "INFO",
            f"Reconciled {doc}: local={len(rec.local)} satisfied={len(rec.satisfied)} "
            f"to_install={len(rec.to_install)}",
        )
        return rec
