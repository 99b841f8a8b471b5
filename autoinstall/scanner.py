from __future__ import annotations
from pathlib import Path
from typing import Callable, Dict, Iterable

from .errors import ReadError
from .parsers import parse_commonjs, parse_esm


PARSERS: Dict[str, Callable[[str], Iterable[tuple[int, str]]]] = {
    "esm": parse_esm,
    "commonjs": parse_commonjs,
}


def read_document(path: Path | str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8", errors="ignore")
    except OSError as e:
        raise ReadError(path, e.strerror or str(e)) from e


def extract_specifiers(text: str) -> list[str]:
    """
    Lexical scan for module specifiers over the whole document text.

    Not syntax-aware: commented-out imports are found too, and text that is
    not valid JavaScript simply produces fewer matches. Results are ordered
    by their first position in the text, duplicates dropped.
    """
    hits: list[tuple[int, str]] = []
    for parser in PARSERS.values():
        hits.extend(parser(text))
    hits.sort(key=lambda h: h[0])

    seen: set[str] = set()
    out: list[str] = []
    for _, spec in hits:
        if spec in seen:
            continue
        seen.add(spec)
        out.append(spec)
    return out
