"""Record labels for types and extension modules.

A label is a single quoted record with three stacked cells::

    "{«stereotype»\\nName|constants and properties\\l|methods\\l}"

Every member line ends in ``\\l`` (left aligned).  The output is passed to
Graphviz verbatim, so escaping must be exact.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from loguru import logger

from class_atlas.errors import DefaultValueError
from class_atlas.labels.escape import LEFT_ALIGN, LINE_BREAK, escape, record
from class_atlas.labels.filter import MemberFilter
from class_atlas.labels.types import TypeResolver, canonicalize
from class_atlas.labels.values import format_value, value_type_name
from class_atlas.metadata.descriptors import MethodDescriptor
from class_atlas.schema import HEADER_STEREOTYPES, UNKNOWN_DEFAULT, VISIBILITY_MARKERS, Stereotype, Visibility

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from class_atlas.metadata.descriptors import (
        ExtensionDescriptor,
        FunctionDescriptor,
        ParameterDescriptor,
        PropertyDescriptor,
        TypeDescriptor,
    )
    from class_atlas.metadata.provider import MetadataProvider
    from class_atlas.settings import DiagramOptions


class LabelRenderer:
    """Builds record labels under a fixed set of diagram options."""

    def __init__(self, provider: MetadataProvider, options: DiagramOptions) -> None:
        self._provider = provider
        self._options = options
        self._filter = MemberFilter(options)
        self._types = TypeResolver(provider)

    # -- whole labels ---------------------------------------------------------

    def type_label(self, descriptor: TypeDescriptor) -> str:
        parent = self._provider.find_type(descriptor.parent) if descriptor.parent else None

        header = ""
        stereotype = HEADER_STEREOTYPES.get(descriptor.kind)
        if stereotype is not None:
            header += stereotype + LINE_BREAK
        header += escape(descriptor.name)

        body = self.constants(descriptor.constants, parent)
        body += "".join(
            self.property_line(p) for p in descriptor.properties if self._filter.shows_member(p, descriptor.name)
        )

        footer = self.functions(descriptor.methods, descriptor.name)
        return record(header, body, footer)

    def extension_label(self, extension: ExtensionDescriptor) -> str:
        header = Stereotype.EXTENSION + LINE_BREAK + escape(extension.name)
        body = self.constants(extension.constants, None)
        footer = self.functions(extension.functions)
        return record(header, body, footer)

    # -- sections -------------------------------------------------------------

    def constants(self, constants: Mapping[str, Any], parent: TypeDescriptor | None) -> str:
        """Constants as read-only static attributes; empty when hidden by options."""
        if not self._options.show_constants:
            return ""
        lines: list[str] = []
        for name, value in constants.items():
            if not self._filter.shows_constant(name, value, parent):
                continue
            type_name = canonicalize(value_type_name(value)) or ""
            lines.append(
                f"+ {Stereotype.STATIC} {escape(name)} : {escape(type_name)} = {format_value(value)} "
                f"\\{{readOnly\\}}{LEFT_ALIGN}"
            )
        return "".join(lines)

    def property_line(self, prop: PropertyDescriptor) -> str:
        line = VISIBILITY_MARKERS[prop.visibility]
        if prop.is_static:
            line += f" {Stereotype.STATIC}"
        line += " " + escape(prop.name)

        type_name = self._types.property_type(prop)
        if type_name is not None:
            line += " : " + escape(type_name)

        # None defaults are not worth showing
        if prop.has_default and prop.default_value is not None:
            line += " = " + format_value(prop.default_value)
        return line + LEFT_ALIGN

    def functions(self, functions: Iterable[FunctionDescriptor], type_name: str | None = None) -> str:
        """Methods (filtered) or bare functions (always shown), one per line."""
        lines: list[str] = []
        for function in functions:
            if isinstance(function, MethodDescriptor):
                if type_name is not None and not self._filter.shows_member(function, type_name):
                    continue
                line = VISIBILITY_MARKERS[function.visibility]
                if function.is_abstract:
                    line += f" {Stereotype.ABSTRACT}"
                if function.is_static:
                    line += f" {Stereotype.STATIC}"
            else:
                line = VISIBILITY_MARKERS[Visibility.PUBLIC]
            line += " " + escape(function.name) + "("
            line += ", ".join(self.parameter(p, function) for p in function.parameters)
            line += ")"

            return_type = self._types.return_type(function)
            if return_type is not None:
                line += " : " + escape(return_type)
            lines.append(line + LEFT_ALIGN)
        return "".join(lines)

    def parameter(self, parameter: ParameterDescriptor, function: FunctionDescriptor) -> str:
        text = "inout " if parameter.is_by_reference else ""
        text += escape(parameter.name)

        type_name = self._types.parameter_type(parameter, function)
        if type_name is not None:
            text += " : " + escape(type_name)

        if parameter.is_optional:
            try:
                text += " = " + format_value(parameter.evaluate_default())
            except DefaultValueError as exc:
                logger.debug("{}", exc)
                text += " = " + UNKNOWN_DEFAULT
        return text
