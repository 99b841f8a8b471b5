from __future__ import annotations
from pathlib import Path
from typing import Iterable, Iterator

from .errors import LedgerError


class Ledger:
    """
    Set of specifiers known to be installed.

    Without a sidecar the ledger lives for one run only. With a sidecar every
    `record()` rewrites the file, so a crash never loses a completed install.
    """

    def __init__(self, sidecar: Path | str | None = None, entries: Iterable[str] = ()):
        self.sidecar = Path(sidecar) if sidecar is not None else None
        self._entries: set[str] = set(entries)

    @classmethod
    def load(cls, sidecar: Path | str) -> "Ledger":
        entries: list[str] = []
        try:
            text = Path(sidecar).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            text = ""
        for raw in text.splitlines():
            line = raw.strip()
            if line:
                entries.append(line)
        return cls(sidecar, entries)

    @property
    def persisted(self) -> bool:
        return self.sidecar is not None

    def __contains__(self, specifier: object) -> bool:
        return specifier in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def add(self, specifier: str) -> None:
        self._entries.add(specifier)

    def record(self, specifier: str) -> None:
        self.add(specifier)
        if self.persisted:
            self.save()

    def save(self) -> None:
        if self.sidecar is None:
            return
        body = "".join(f"{e}\n" for e in sorted(self._entries))
        try:
            with open(self.sidecar, "w", encoding="utf-8") as f:
                f.write(body)
        except OSError as e:
            raise LedgerError(f"Cannot write ledger {self.sidecar}: {e}") from e
