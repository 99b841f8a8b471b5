from __future__ import annotations
from collections import Counter, defaultdict
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
import json
import sqlite3


@dataclass
class RunAgg:
    by_cmd: dict    # {cmd: {count, mean_sec, p50_sec, p95_sec}}
    outcomes: dict  # {outcome: count}
    top_failed: list  # list[[package, failures]]
    def to_json(self) -> str:
        return json.dumps(asdict(self), indent=2)


def _pct(xs: list[float], p: float) -> float:
    if not xs: return 0.0
    xs = sorted(xs)
    i = int(round((p / 100.0) * (len(xs) - 1)))
    return xs[i]


def summarize_runs(sqlite_path: str) -> RunAgg:
    p = Path(sqlite_path)
    if not p.exists():
        return RunAgg(by_cmd={}, outcomes={}, top_failed=[])
    conn = sqlite3.connect(str(p))
    try:
        cur = conn.execute("SELECT cmd, started_at, finished_at FROM runs")
        buckets: dict[str, list[float]] = defaultdict(list)
        for cmd, start_s, end_s in cur:
            if not (start_s and end_s):
                continue
            try:
                start = datetime.fromisoformat(start_s)
                end = datetime.fromisoformat(end_s)
            except ValueError:
                continue
            buckets[cmd].append(max(0.0, (end - start).total_seconds()))

        outcomes: Counter = Counter()
        failed: Counter = Counter()
        for pkg, outcome in conn.execute("SELECT package, outcome FROM installs"):
            outcomes[outcome] += 1
            if outcome == "install_failed":
                failed[pkg] += 1
    finally:
        conn.close()

    out: dict[str, dict] = {}
    for cmd, xs in buckets.items():
        if not xs: continue
        mean = sum(xs) / len(xs)
        out[cmd] = {"count": len(xs), "mean_sec": round(mean, 3),
                    "p50_sec": round(_pct(xs, 50), 3),
                    "p95_sec": round(_pct(xs, 95), 3)}
    return RunAgg(by_cmd=out, outcomes=dict(outcomes),
                  top_failed=[[k, v] for k, v in failed.most_common(5)])


def print_run_stats(ra: RunAgg, console):
    if not ra.by_cmd and not ra.outcomes:
        console.print("No completed runs found.")
        return
    if ra.by_cmd:
        console.print("Run durations by command:")
        for cmd, m in ra.by_cmd.items():
            console.print(f"  - {cmd}: n={m['count']} mean={m['mean_sec']}s "
                          f"p50={m['p50_sec']}s p95={m['p95_sec']}s")
    if ra.outcomes:
        console.print("Package outcomes:")
        for k, v in sorted(ra.outcomes.items()):
            console.print(f"  - {k}: {v}")
    if ra.top_failed:
        console.print("Most frequent install failures:")
        for pkg, n in ra.top_failed:
            console.print(f"  - {pkg}: {n}")
