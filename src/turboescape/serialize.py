"""HTML-safe text serialization."""

from .constants import ESCAPE_TABLE

_ESCAPE_TRANSLATION = str.maketrans(dict(ESCAPE_TABLE))


def escape(text):
    """Replace every escapable character in text with its replacement text.

    Characters outside ESCAPE_TABLE are kept as-is, so text without any of
    them comes back unchanged. Escaping is not idempotent: the "&" of an
    existing reference is escaped again.
    """
    if not text:
        return ""
    return text.translate(_ESCAPE_TRANSLATION)
