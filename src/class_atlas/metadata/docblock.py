"""Extract type tags from documentation comments.

Two notations are understood:

- Javadoc style blocks (``/** ... */``) with ``@param T $x``, ``@var T`` and
  ``@return T`` tags at the start of a line.
- reStructuredText field lists as used in Python docstrings:
  ``:param T x:`` / ``:type x: T`` count as ``param`` tags, ``:type: T`` /
  ``:var T x:`` as ``var`` tags and ``:rtype: T`` as the ``return`` tag.

Only the first whitespace-delimited token after a tag is taken as the type.
"""

from __future__ import annotations

import inspect
import re

_BLOCK_DECORATION = re.compile(r"(^(?:[ \t]*\*)[ \t]*|[ \t]+$)", re.MULTILINE)

_REST_PATTERNS: dict[str, tuple[re.Pattern[str], ...]] = {
    "param": (
        re.compile(r"^:param[ \t]+(\S+)[ \t]+\w+[ \t]*:", re.MULTILINE),
        re.compile(r"^:type[ \t]+\w+[ \t]*:[ \t]*(\S+)", re.MULTILINE),
    ),
    "var": (
        re.compile(r"^:type[ \t]*:[ \t]*(\S+)", re.MULTILINE),
        re.compile(r"^:var[ \t]+(\S+)[ \t]+\w+[ \t]*:", re.MULTILINE),
        re.compile(r"^:vartype[ \t]+\w+[ \t]*:[ \t]*(\S+)", re.MULTILINE),
    ),
    "return": (re.compile(r"^:rtype[ \t]*:[ \t]*(\S+)", re.MULTILINE),),
}


def clean_doc_comment(doc: str | None) -> str | None:
    """Strip comment decoration and indentation from a raw doc comment."""
    if doc is None:
        return None
    text = doc.strip()
    if text.startswith("/**") and text.endswith("*/"):
        return _BLOCK_DECORATION.sub("", text[3:-2]).strip()
    return inspect.cleandoc(text)


def doc_tags(doc: str | None, tag: str) -> list[str]:
    """Return the type token of every *tag* entry in *doc*, in order of appearance."""
    text = clean_doc_comment(doc)
    if not text:
        return []

    found: list[tuple[int, str]] = [
        (m.start(), m.group(1).strip()) for m in re.finditer(rf"^@{re.escape(tag)}[ \t]+(\S+)", text, re.MULTILINE)
    ]
    for pattern in _REST_PATTERNS.get(tag, ()):
        found.extend((m.start(), m.group(1).strip()) for m in pattern.finditer(text))
    found.sort(key=lambda item: item[0])
    return [value for _, value in found]


def single_doc_tag(doc: str | None, tag: str) -> str | None:
    """Return the tag value if *doc* has exactly one *tag* entry, else ``None``."""
    values = doc_tags(doc, tag)
    if len(values) != 1:
        return None
    return values[0]
