from .esm import parse_esm
from .commonjs import parse_commonjs

__all__ = [
    "parse_esm",
    "parse_commonjs",
]
