from __future__ import annotations
import sqlite3
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

SCHEMA = """
CREATE TABLE IF NOT EXISTS runs(
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  started_at TEXT NOT NULL,
  finished_at TEXT,
  cmd TEXT NOT NULL,
  config_hash TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS events(
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  run_id INTEGER NOT NULL,
  ts TEXT NOT NULL,
  level TEXT NOT NULL,
  msg TEXT NOT NULL,
  FOREIGN KEY(run_id) REFERENCES runs(id)
);
CREATE TABLE IF NOT EXISTS installs(
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  run_id INTEGER NOT NULL,
  ts TEXT NOT NULL,
  document TEXT NOT NULL,
  package TEXT NOT NULL,
  outcome TEXT NOT NULL,
  detail TEXT,
  FOREIGN KEY(run_id) REFERENCES runs(id)
);
"""


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class Run:
    id: int

class RunLogger:
    def __init__(self, path: str, echo: bool = False, console=None):
        self.path = path
        self.echo = echo
        self.console = console
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(path)
        self.conn.executescript(SCHEMA)
        self.conn.commit()
        self._run_id: int | None = None

    def _echo(self, line: str):
        if not self.echo:
            return
        if self.console is not None:
            self.console.print(line, style="dim", markup=False, highlight=False)
        else:
            print(line)

    def start(self, cmd: str, config_hash: str) -> Run:
        cur = self.conn.cursor()
        cur.execute(
            "INSERT INTO runs(started_at, cmd, config_hash) VALUES (?, ?, ?)",
            (_now(), cmd, config_hash),
        )
        self.conn.commit()
        self._run_id = cur.lastrowid
        return Run(id=self._run_id)

    def log(self, level: str, msg: str):
        assert self._run_id is not None
        ts = _now()
        self.conn.execute(
            "INSERT INTO events(run_id, ts, level, msg) VALUES (?, ?, ?, ?)",
            (self._run_id, ts, level.upper(), msg),
        )
        self.conn.commit()
        self._echo(f"[{ts}] {level.upper():5s} {msg}")

    def log_install(self, *, document: str, package: str, outcome: str,
                    detail: str | None = None):
        """Record the final outcome for one package of one document."""
        assert self._run_id is not None
        self.conn.execute(
            "INSERT INTO installs(run_id, ts, document, package, outcome, detail) "
            "VALUES (?, ?, ?, ?, ?, ?)",
            (self._run_id, _now(), document, package, outcome, (detail or "")[:1000]),
        )
        self.conn.commit()

    def finish(self):
        if self._run_id is not None:
            ts = _now()
            self.conn.execute(
                "UPDATE runs SET finished_at=? WHERE id=?",
                (ts, self._run_id),
            )
            self.conn.commit()
            self._echo(f"[{ts}] FINISH run_id={self._run_id}")
            self.conn.close()
