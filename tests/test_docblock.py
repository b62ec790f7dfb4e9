"""Tests for doc comment tag extraction."""

from __future__ import annotations

from class_atlas.metadata.docblock import clean_doc_comment, doc_tags, single_doc_tag


def test_clean_block_comment():
    doc = "/**\n     * Summary line.\n     *\n     * @var int   \n     */"
    assert clean_doc_comment(doc) == "Summary line.\n\n@var int"


def test_clean_single_line_block():
    assert clean_doc_comment("/** @var string */") == "@var string"


def test_clean_none():
    assert clean_doc_comment(None) is None


def test_javadoc_tags_in_order():
    doc = "/**\n * @param int $a\n * @param Foo $b the foo\n * @return void\n */"
    assert doc_tags(doc, "param") == ["int", "Foo"]
    assert doc_tags(doc, "return") == ["void"]
    assert doc_tags(doc, "var") == []


def test_tags_must_start_a_line():
    assert doc_tags("/** Returns it. See @return int */", "return") == []


def test_rest_fields():
    doc = """Add two numbers.

    :param int a: first
    :type b: float
    :rtype: float
    """
    assert doc_tags(doc, "param") == ["int", "float"]
    assert doc_tags(doc, "return") == ["float"]


def test_rest_attribute_type():
    assert single_doc_tag("Counter.\n\n:type: int", "var") == "int"
    assert single_doc_tag(":var str name: the name", "var") == "str"


def test_single_tag_requires_exactly_one():
    assert single_doc_tag("/**\n * @return int\n */", "return") == "int"
    assert single_doc_tag("/**\n * @return int\n * @return string\n */", "return") is None
    assert single_doc_tag(None, "return") is None
