"""Escaping Constants

This module defines the characters that are replaced when text is escaped
for HTML output, and the literal text each one is replaced with.

Usage:
    from turboescape.constants import ESCAPE_TABLE, REFERENCE_START, REFERENCE_END

The set goes beyond the five markup-significant characters: every character
that can open an attribute, a template expression or a script context
(backtick, space, brackets, braces, sign characters) is replaced by a
numeric character reference.
"""

from types import MappingProxyType

# Character reference delimiters
REFERENCE_START = "&"
REFERENCE_END = ";"
NUMERIC_MARKER = "#"
HEX_MARKERS = "xX"

# Character -> replacement text
ESCAPE_TABLE = MappingProxyType({
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
    "`": "&#96;",
    " ": "&#32;",
    "!": "&#33;",
    "@": "&#64;",
    "$": "&#36;",
    "%": "&#37;",
    "(": "&#40;",
    ")": "&#41;",
    "=": "&#61;",
    "+": "&#43;",
    "{": "&#123;",
    "}": "&#125;",
    "[": "&#91;",
    "]": "&#93;",
})

ESCAPED_CHARACTERS = frozenset(ESCAPE_TABLE)
