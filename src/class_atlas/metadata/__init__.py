"""Metadata package — descriptors and the providers that supply them."""

from __future__ import annotations

from class_atlas.metadata.catalog import load_catalog, parse_catalog
from class_atlas.metadata.descriptors import (
    MISSING,
    ExtensionDescriptor,
    FunctionDescriptor,
    MethodDescriptor,
    ParameterDescriptor,
    PropertyDescriptor,
    TypeDescriptor,
)
from class_atlas.metadata.introspect import IntrospectionProvider
from class_atlas.metadata.provider import MetadataProvider, StaticProvider

__all__ = [
    "MISSING",
    "ExtensionDescriptor",
    "FunctionDescriptor",
    "IntrospectionProvider",
    "MetadataProvider",
    "MethodDescriptor",
    "ParameterDescriptor",
    "PropertyDescriptor",
    "StaticProvider",
    "TypeDescriptor",
    "load_catalog",
    "parse_catalog",
]
