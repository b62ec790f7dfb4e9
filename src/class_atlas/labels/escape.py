"""Escaping for Graphviz record labels.

See https://graphviz.org/doc/info/shapes.html#record and the ``escString``
attribute type.
"""

from __future__ import annotations

import re

_NON_WORD = re.compile(r"(\W)")

_CONTROL_CHARS = str.maketrans({"\r": "\\r", "\n": "\\n", "\t": "\\t"})

# Record label punctuation
SECTION = "|"
LINE_BREAK = "\\n"
LEFT_ALIGN = "\\l"


def escape(text: str) -> str:
    """Escape *text* for use inside a record label.

    Control characters become their two-character escapes first; afterwards
    every non-word character (including the backslashes just introduced) is
    prefixed with a backslash.
    """
    return _NON_WORD.sub(r"\\\1", text.translate(_CONTROL_CHARS))


def record(*sections: str) -> str:
    """Join *sections* into one quoted, vertically stacked record label."""
    return '"{' + SECTION.join(sections) + '}"'
