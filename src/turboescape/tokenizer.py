import re

from .constants import REFERENCE_END, REFERENCE_START
from .entities import resolve_reference

_REFERENCE_BOUNDARY_PATTERN = re.compile(f"[{re.escape(REFERENCE_START + REFERENCE_END)}]")


class ReferenceScanner:
    """Single-pass scanner that decodes character references in text.

    Text is consumed left to right in two modes. In NORMAL mode characters
    are copied to the output until an "&" opens a candidate reference. In
    ACCUMULATING mode characters are held until ";" closes the reference,
    which is then resolved (or passed through literally when it cannot be).

    The hold-buffer is the slice text[hold_start:pos]. It is never copied
    while it grows; runs of plain characters are jumped over with find()
    and a compiled pattern instead of being visited one by one.
    """

    NORMAL = 0
    ACCUMULATING = 1

    __slots__ = ("hold_start", "length", "output", "pos", "state", "text")

    def __init__(self, text):
        self.text = text
        self.length = len(text)
        self.pos = 0
        self.state = self.NORMAL
        self.hold_start = -1
        self.output = []

    def run(self):
        """Scan the whole text and return the decoded result."""
        while self.pos < self.length:
            if self.state == self.NORMAL:
                self._state_normal()
            else:
                self._state_accumulating()

        # Unterminated reference: flush the held text verbatim
        if self.state == self.ACCUMULATING:
            self.output.append(self.text[self.hold_start:])
            self._reset_hold()

        return "".join(self.output)

    def _reset_hold(self):
        self.hold_start = -1
        self.state = self.NORMAL

    def _state_normal(self):
        text = self.text
        pos = self.pos
        amp = text.find(REFERENCE_START, pos)
        if amp == -1:
            self.output.append(text[pos:])
            self.pos = self.length
            return
        if amp > pos:
            self.output.append(text[pos:amp])
        self.hold_start = amp
        self.state = self.ACCUMULATING
        self.pos = amp + 1

    def _state_accumulating(self):
        text = self.text
        match = _REFERENCE_BOUNDARY_PATTERN.search(text, self.pos)
        if match is None:
            # Hold everything up to the end of input
            self.pos = self.length
            return

        boundary = match.start()
        if text[boundary] == REFERENCE_START:
            # A new "&" restarts the reference. The held text is dropped, not
            # flushed: "&a&amp;" decodes to "&".
            self.hold_start = boundary
            self.pos = boundary + 1
            return

        body = text[self.hold_start + 1:boundary]
        self.output.append(resolve_reference(body))
        self._reset_hold()
        self.pos = boundary + 1


def unescape(text):
    """Decode named, decimal and hexadecimal character references in text.

    Malformed, unknown and unterminated references are kept as literal text,
    so this never fails on str input.

    >>> unescape("&quot;&amp;&lt;&gt;")
    '"&<>'
    >>> unescape("&#x27;&#40;&unknown;")
    "'(&unknown;"
    """
    if not text:
        return ""
    if REFERENCE_START not in text:
        return text
    return ReferenceScanner(text).run()
