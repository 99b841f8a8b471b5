from __future__ import annotations
import os
import subprocess
import sys
from pathlib import Path
from typing import IO

from .errors import CommandError


def is_source_file(path: Path, include_ext: set[str]) -> bool:
    return path.name.lower().endswith(tuple(include_ext))


def is_local_specifier(specifier: str, base_dir: Path | str) -> bool:
    # Bare package names go through the same lookup and simply miss.
    try:
        full = os.path.join(os.fspath(base_dir), specifier)
        return os.access(full, os.F_OK)
    except (OSError, ValueError, TypeError):
        return False


def run_command(
    cmd: list[str],
    *,
    cwd: str | None = None,
    stream: bool = True,
    stdout: IO[str] | None = None,
) -> str:
    """
    Run cmd, tee its stdout into `stdout` (sys.stdout by default) and return it.
    stderr is inherited when streaming and discarded otherwise.
    Raises CommandError on a non-zero exit or when the process cannot start.
    """
    sink = stdout if stdout is not None else sys.stdout
    try:
        proc = subprocess.Popen(
            cmd,
            cwd=cwd,
            stdout=subprocess.PIPE,
            stderr=None if stream else subprocess.DEVNULL,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except OSError as e:
        raise CommandError(cmd, None, str(e)) from e

    chunks: list[str] = []
    assert proc.stdout is not None
    with proc.stdout:
        for line in proc.stdout:
            chunks.append(line)
            if stream:
                sink.write(line)
                sink.flush()
    code = proc.wait()
    if code != 0:
        raise CommandError(cmd, code)
    return "".join(chunks)
