from .constants import ESCAPE_TABLE
from .entities import NAMED_ENTITIES
from .serialize import escape
from .tokenizer import ReferenceScanner, unescape

__all__ = [
    "ESCAPE_TABLE",
    "NAMED_ENTITIES",
    "ReferenceScanner",
    "escape",
    "unescape",
]
