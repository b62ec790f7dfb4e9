"""Type name canonicalization and the type resolution chain.

Type information comes from imprecise sources (free-text doc tags, class hints
that may not resolve).  Everything here degrades to a placeholder or to "no
type" instead of failing.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from loguru import logger

from class_atlas.metadata.docblock import doc_tags, single_doc_tag
from class_atlas.metadata.provider import normalize_type_name
from class_atlas.schema import INVALID_CLASS, MIXED

if TYPE_CHECKING:
    from class_atlas.metadata.descriptors import FunctionDescriptor, ParameterDescriptor, PropertyDescriptor
    from class_atlas.metadata.provider import MetadataProvider

_ARRAY_OF = re.compile(r"array\[(\w+)\]", re.IGNORECASE | re.ASCII)
_IDENTIFIER = re.compile(r"\w+", re.ASCII)
_QUALIFIED_NAME = re.compile(r"\w+(?:[.\\]\w+)*")

TYPE_ALIASES: dict[str, str] = {
    "integer": "int",
    "double": "float",
    "boolean": "bool",
}

PRIMITIVE_TYPES: frozenset[str] = frozenset(
    {"int", "float", "bool", "string", "null", "resource", "array", "void", "mixed"}
)


def canonicalize(raw: str | None) -> str | None:
    """Normalize a free-text type name for display.

    ``array[T]`` becomes ``T[]``, aliases map to their primitive, primitives
    are lower-cased, anything that is not an identifier becomes ``mixed`` and
    class names pass through untouched.
    """
    if raw is None:
        return None
    match = _ARRAY_OF.fullmatch(raw)
    if match:
        return f"{canonicalize(match.group(1))}[]"
    if not _IDENTIFIER.fullmatch(raw):
        return MIXED
    low = raw.lower()
    if low in TYPE_ALIASES:
        return TYPE_ALIASES[low]
    if low in PRIMITIVE_TYPES:
        return low
    return raw


def _declared_type(hint: str) -> str | None:
    """Canonical form of a declared (not doc-comment) type; qualified class names pass through."""
    hint = normalize_type_name(hint)
    if not _IDENTIFIER.fullmatch(hint) and _QUALIFIED_NAME.fullmatch(hint):
        return hint
    return canonicalize(hint)


def is_builtin_type(canonical: str) -> bool:
    """True for primitives, arrays of anything and the ``mixed`` placeholder."""
    return canonical in PRIMITIVE_TYPES or canonical.endswith("[]")


class TypeResolver:
    """Resolves the display type of parameters, properties and return values."""

    def __init__(self, provider: MetadataProvider) -> None:
        self._provider = provider

    def parameter_type(self, parameter: ParameterDescriptor, function: FunctionDescriptor) -> str | None:
        """Type of *parameter* of *function*.

        A declared class hint wins; if it names a type that does not exist the
        result is ``«invalidClass»``.  Otherwise ``param`` doc tags are used,
        but only when there is exactly one per parameter, so positions line up.
        A hint that is a type expression rather than a class name defers to
        the doc tags and falls back to ``mixed``.
        """
        fallback: str | None = None
        if parameter.declared_type_name is not None:
            hint = normalize_type_name(parameter.declared_type_name)
            if _IDENTIFIER.fullmatch(hint) or _ARRAY_OF.fullmatch(hint):
                canonical = canonicalize(hint)
                if canonical is not None and is_builtin_type(canonical):
                    return canonical
            descriptor = self._provider.find_type(hint)
            if descriptor is not None:
                return descriptor.name
            if _QUALIFIED_NAME.fullmatch(hint):
                logger.debug(
                    "Parameter {!r} of {}() hints unknown class {!r}",
                    parameter.name,
                    function.name,
                    parameter.declared_type_name,
                )
                return INVALID_CLASS
            fallback = MIXED

        tags = doc_tags(function.doc_comment, "param")
        if len(tags) == len(function.parameters) and parameter.position < len(tags):
            return canonicalize(tags[parameter.position])
        return fallback

    def property_type(self, prop: PropertyDescriptor) -> str | None:
        if prop.declared_type_name is not None:
            return _declared_type(prop.declared_type_name)
        return canonicalize(single_doc_tag(prop.doc_comment, "var"))

    def return_type(self, function: FunctionDescriptor) -> str | None:
        if function.declared_return_type_name is not None:
            return _declared_type(function.declared_return_type_name)
        return canonicalize(single_doc_tag(function.doc_comment, "return"))
