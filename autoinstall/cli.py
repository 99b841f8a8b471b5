from __future__ import annotations
import argparse
from pathlib import Path

from .config import Config
from .console import make_console, status
from .errors import UsageError
from .logging_db import RunLogger
from .runner import RunSummary, build_runner
from .stats_cmd import print_run_stats, summarize_runs


def _target(args) -> tuple[Path, bool]:
    """Returns (path, is_directory) for -f / -d."""
    if args.file:
        return Path(args.file).resolve(), False
    if args.directory:
        return Path(args.directory).resolve(), True
    raise UsageError("You must provide either a file with -f or a directory with -d.")


def _open_logger(cfg: Config, cmd: str, args, console) -> RunLogger | None:
    if not cfg.runtime.record_runs:
        return None
    logger = RunLogger(cfg.runtime.sqlite_path, echo=getattr(args, "verbose", False), console=console)
    logger.start(cmd=cmd, config_hash=cfg.hash())
    return logger


def _print_summary(console, reports):
    s = RunSummary.of(reports)
    parts = [f"files={s.files}"]
    if s.unreadable:
        parts.append(f"unreadable={s.unreadable}")
    parts += [f"{k}={v}" for k, v in sorted(s.counts.items())]
    console.print("Summary: " + " ".join(parts), markup=False)


def _run(args, console, *, dry_run: bool) -> int:
    target, is_dir = _target(args)
    what = "checking" if dry_run else "checking and installing"
    logger = None
    try:
        cfg = Config.load(args.config)
        logger = _open_logger(cfg, "check" if dry_run else "install", args, console)
        runner = build_runner(
            cfg, console,
            target=target,
            confirm=getattr(args, "confirm", False),
            persist=True if args.persist else None,
            dry_run=dry_run,
            logger=logger,
        )
        if is_dir:
            reports = runner.run_directory(target)
            done = f"Finished {what} packages for all files"
        else:
            status(console, "processing", f"Processing file: {target}")
            reports = [runner.run_file(target)]
            done = f"Finished {what} packages for the file"
        _print_summary(console, reports)
        status(console, "success", done)
        if logger:
            logger.log("INFO", done)
        return 0
    except OSError as e:
        status(console, "failure", str(e))
        if logger:
            logger.log("ERROR", str(e))
        return 1
    finally:
        if logger:
            logger.finish()


def cmd_install(args, console) -> int:
    return _run(args, console, dry_run=False)


def cmd_check(args, console) -> int:
    return _run(args, console, dry_run=True)


def cmd_stats_runs(args, console) -> int:
    cfg = Config.load(args.config)
    ra = summarize_runs(cfg.runtime.sqlite_path)
    if args.json:
        console.print_json(ra.to_json())
    else:
        print_run_stats(ra, console)
    return 0


def _add_target_args(p: argparse.ArgumentParser):
    grp = p.add_mutually_exclusive_group()
    grp.add_argument("-f", "--file", help="Path to a single JavaScript file to analyze")
    grp.add_argument("-d", "--directory", help="Path to the directory to analyze")
    p.add_argument("--persist", action="store_true",
                   help="Load/save the installed-package ledger next to the sources")
    p.add_argument("--config", default=None, help="Config file (YAML)")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="autoinstall")
    p.add_argument("--verbose", action="store_true", help="Echo progress logs to the console")
    sub = p.add_subparsers(dest="cmd", required=True)

    # Install command
    pi = sub.add_parser("install", help="Install missing packages referenced by a file or directory")
    _add_target_args(pi)
    pi.add_argument("--confirm", action="store_true",
                    help="Prompt for confirmation before installing each package")
    pi.set_defaults(func=cmd_install)

    # Check command
    pc = sub.add_parser("check", help="List missing packages without installing them")
    _add_target_args(pc)
    pc.set_defaults(func=cmd_check)

    # stats parent
    pstats = sub.add_parser("stats", help="Show statistics for logged runs")
    ssub = pstats.add_subparsers(dest="target", required=True)
    pr = ssub.add_parser("runs", help="Summarize run durations and package outcomes")
    pr.add_argument("--config", default=None, help="Config file (for sqlite path)")
    pr.add_argument("--json", action="store_true", help="Output JSON")
    pr.set_defaults(func=cmd_stats_runs)
    return p


def main(argv: list[str] | None = None, console=None) -> int:
    args = build_parser().parse_args(argv)
    console = console or make_console()
    try:
        return args.func(args, console)
    except UsageError as e:
        status(console, "failure", str(e))
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
