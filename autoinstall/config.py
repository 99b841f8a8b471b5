from __future__ import annotations
from dataclasses import dataclass, field
from typing import List
import hashlib
import io
import yaml


@dataclass
class RuntimeCfg:
    sqlite_path: str = "./out/runlog.sqlite"
    record_runs: bool = True


@dataclass
class ParsingCfg:
    include_ext: List[str] = field(default_factory=lambda: [".js", ".mjs"])


@dataclass
class NpmCfg:
    executable: str = "npm"
    sudo: bool = False
    cwd: str | None = None  # None: run npm in the current directory
    stream_output: bool = True


@dataclass
class LedgerCfg:
    persist: bool = False
    sidecar: str = ".autoinstall-ledger"


@dataclass
class Config:
    runtime: RuntimeCfg = field(default_factory=RuntimeCfg)
    parsing: ParsingCfg = field(default_factory=ParsingCfg)
    npm: NpmCfg = field(default_factory=NpmCfg)
    ledger: LedgerCfg = field(default_factory=LedgerCfg)

    @staticmethod
    def load(path: str | None) -> "Config":
        if path is None:
            return Config()
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        # Overlay known keys onto defaults; unknown keys are ignored (keeps forward-compatibility)
        def merged(default_obj, src: dict):
            base = {**default_obj.__dict__}
            base.update({k: v for k, v in (src or {}).items() if k in base})
            return base

        runtime = RuntimeCfg(**merged(RuntimeCfg(), data.get("runtime", {})))
        parsing = ParsingCfg(**merged(ParsingCfg(), data.get("parsing", {})))
        npm = NpmCfg(**merged(NpmCfg(), data.get("npm", {})))
        ledger = LedgerCfg(**merged(LedgerCfg(), data.get("ledger", {})))
        return Config(runtime=runtime, parsing=parsing, npm=npm, ledger=ledger)

    def hash(self) -> str:
        buf = io.StringIO()
        yaml.safe_dump(
            {
                "runtime": self.runtime.__dict__,
                "parsing": self.parsing.__dict__,
                "npm": self.npm.__dict__,
                "ledger": self.ledger.__dict__,
            },
            buf,
            sort_keys=True,
        )
        return hashlib.sha256(buf.getvalue().encode()).hexdigest()[:12]
