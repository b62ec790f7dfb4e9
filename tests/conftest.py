"""Shared test fixtures for Class Atlas."""

from __future__ import annotations

import copy

import pytest

from class_atlas.builder import DiagramBuilder
from class_atlas.metadata.catalog import parse_catalog
from class_atlas.settings import DiagramOptions

# A small collection hierarchy:
#
#   Traversable <- IteratorAggregate <-.
#                                        Collection (abstract) <- Bag
#   Countable <-------------------------'                          |
#   Countable <----------------------------------------------------'
CATALOG: dict = {
    "types": [
        {"name": "Traversable", "kind": "interface"},
        {
            "name": "Countable",
            "kind": "interface",
            "methods": [{"name": "count", "abstract": True, "doc": "/** @return int */"}],
        },
        {"name": "IteratorAggregate", "kind": "interface", "interfaces": ["Traversable"]},
        {
            "name": "Collection",
            "kind": "abstractClass",
            "interfaces": ["Countable", "IteratorAggregate"],
            "constants": {"MAX": 10, "NAME": "c"},
            "properties": [
                {"name": "items", "visibility": "private", "default": []},
                {"name": "size", "visibility": "protected", "default": 0, "doc": "/** @var integer */"},
                {"name": "label", "default": None},
            ],
            "methods": [
                {"name": "count", "doc": "/**\n * Number of items.\n *\n * @return integer\n */"},
                {"name": "getIterator", "abstract": True, "returns": "Iterator"},
            ],
        },
        {
            "name": "Bag",
            "parent": "Collection",
            "interfaces": ["Countable"],
            "constants": {"MAX": 10, "MIN": 1},
            "properties": [{"name": "extra", "static": True, "default": "x"}],
            "methods": [
                {
                    "name": "add",
                    "parameters": [
                        {"name": "item", "type": "Collection"},
                        {"name": "flag", "default": True},
                        {"name": "out", "by_reference": True, "default_error": "Undefined constant FOO"},
                    ],
                },
            ],
        },
        {"name": "Loner"},
    ],
    "extensions": [
        {
            "name": "json",
            "constants": {"JSON_HEX_TAG": 1},
            "functions": [
                {
                    "name": "json_encode",
                    "parameters": [{"name": "value"}, {"name": "flags", "default": 0}],
                    "doc": "/**\n * @param mixed $value\n * @param int $flags\n * @return string\n */",
                }
            ],
        }
    ],
}


@pytest.fixture
def catalog_data():
    """A fresh copy of the sample catalog document."""
    return copy.deepcopy(CATALOG)


@pytest.fixture
def provider():
    """Static provider materialized from the sample catalog."""
    return parse_catalog(CATALOG)


@pytest.fixture
def options():
    return DiagramOptions()


@pytest.fixture
def builder(provider):
    """Builder on an empty diagram with default options."""
    return DiagramBuilder(provider)
