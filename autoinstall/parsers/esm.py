from __future__ import annotations
import re
from typing import Iterator

# import { a, b as c } from "x"
NAMED_RE = re.compile(r"""\bimport\s+\{[^}]*\}\s*from\s*['"]([^'"\s]+)['"]\s*;?""")
# import a from "x" / import * as a from "x" / import a, { b } from "x"
# (overlaps NAMED_RE; the scanner collapses duplicates)
DEFAULT_RE = re.compile(r"""\bimport\s+[^'"(]*?\s+from\s*['"]([^'"\s]+)['"]\s*;?""")
# import("x")
DYNAMIC_RE = re.compile(r"""\bimport\s*\(\s*['"]([^'"\s]+)['"]\s*\)""")
# import "x"
SIDE_EFFECT_RE = re.compile(r"""\bimport\s*['"]([^'"\s]+)['"]\s*;?""")
# export { a } from "x" / export * from "x" / export * as ns from "x"
REEXPORT_RE = re.compile(r"""\bexport\s+(?:\{[^}]*\}|\*(?:\s+as\s+[\w$]+)?)\s*from\s*['"]([^'"\s]+)['"]\s*;?""")

PATTERNS = (NAMED_RE, DEFAULT_RE, DYNAMIC_RE, SIDE_EFFECT_RE, REEXPORT_RE)


def parse_esm(text: str) -> Iterator[tuple[int, str]]:
    for pat in PATTERNS:
        for m in pat.finditer(text):
            yield m.start(), m.group(1)
