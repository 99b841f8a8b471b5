import sqlite3, json, sys, os

"""
Usage:
  python tools/export_installs.py out/runlog.sqlite out/installs.jsonl [out/install_stats.json]
Writes:
  1) JSONL of package outcomes (run_id, ts, document, package, outcome, detail)
  2) Optional aggregated stats per package (attempts, outcome counts, documents referencing it)
"""

db = sys.argv[1] if len(sys.argv) > 1 else "./out/runlog.sqlite"
out_rows = sys.argv[2] if len(sys.argv) > 2 else "./out/installs.jsonl"
out_stats = sys.argv[3] if len(sys.argv) > 3 else None
os.makedirs(os.path.dirname(out_rows) or ".", exist_ok=True)

conn = sqlite3.connect(db)
conn.row_factory = sqlite3.Row

# 1) dump outcomes
cur = conn.execute("SELECT run_id, ts, document, package, outcome, detail FROM installs ORDER BY id ASC")
rows = [dict(r) for r in cur]
with open(out_rows, "w", encoding="utf-8") as f:
    for row in rows:
        f.write(json.dumps(row, ensure_ascii=False) + "\n")
print(f"Wrote {out_rows}")

# 2) optional aggregate stats
if out_stats:
    stats = {}
    for row in rows:
        pkg = stats.setdefault(row["package"], {"attempts": 0, "outcomes": {}, "documents": set()})
        pkg["outcomes"][row["outcome"]] = pkg["outcomes"].get(row["outcome"], 0) + 1
        if row["outcome"] in ("install_succeeded", "install_failed"):
            pkg["attempts"] += 1
        pkg["documents"].add(row["document"])
    for pkg in stats.values():
        pkg["documents"] = len(pkg["documents"])

    os.makedirs(os.path.dirname(out_stats) or ".", exist_ok=True)
    with open(out_stats, "w", encoding="utf-8") as f:
        f.write(json.dumps({"by_package": stats}, indent=2))
    print(f"Wrote {out_stats}")
