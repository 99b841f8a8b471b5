from __future__ import annotations
import re
from typing import Iterator

# require("x"), with or without a binding in front of it
REQUIRE_RE = re.compile(r"""\brequire\s*\(\s*['"]([^'"\s]+)['"]\s*\)""")


def parse_commonjs(text: str) -> Iterator[tuple[int, str]]:
    for m in REQUIRE_RE.finditer(text):
        yield m.start(), m.group(1)
