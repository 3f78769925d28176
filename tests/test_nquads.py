import pytest

from rdflib import BNode, Literal, URIRef
from rdflib.namespace import XSD

from rdf_canon.nquads import (
        encode_canonical, encode_first_degree, encode_literal, escape_lexical)

EX = 'http://example.org/'

b1 = BNode('b1')
b2 = BNode('b2')
b3 = BNode('b3')
bnode_ids = {b1: 'id1', b2: 'id2', b3: 'id3'}

pred = URIRef(EX + 'predicate')
subj = URIRef(EX + 'subject')
obj = URIRef(EX + 'object')


@pytest.mark.parametrize('quad, reference, expected', [
    (
        (b1, pred, obj, None), 'id1',
        '_:a <http://example.org/predicate> <http://example.org/object> .\n'),
    (
        (subj, pred, b1, None), 'id1',
        '<http://example.org/subject> <http://example.org/predicate> _:a .\n'),
    (
        (b1, pred, b2, None), 'id1',
        '_:a <http://example.org/predicate> _:z .\n'),
    (
        (b2, pred, obj, None), 'id1',
        '_:z <http://example.org/predicate> <http://example.org/object> .\n'),
    (
        (b2, pred, b3, None), 'id1',
        '_:z <http://example.org/predicate> _:z .\n'),
    (
        (subj, pred, obj, b1), 'id1',
        '<http://example.org/subject> <http://example.org/predicate> '
        '<http://example.org/object> _:a .\n'),
    (
        (subj, pred, obj, b2), 'id1',
        '<http://example.org/subject> <http://example.org/predicate> '
        '<http://example.org/object> _:z .\n'),
    (
        (b1, URIRef(EX + 'knows'), b2, b3), 'id1',
        '_:a <http://example.org/knows> _:z _:z .\n'),
    (
        (b1, pred, b1, None), 'id1',
        '_:a <http://example.org/predicate> _:a .\n'),
])
def test_first_degree(quad, reference, expected):
    assert encode_first_degree(quad, reference, bnode_ids) == expected


def test_first_degree_unknown_bnode():
    quad = (b1, pred, BNode('unknown'), None)

    assert encode_first_degree(quad, 'id1', bnode_ids) == (
            '_:a <http://example.org/predicate> _:z .\n')


def test_first_degree_ignores_labels():
    """
    Swapping the labels of the other blank nodes changes nothing.
    """
    quad = (b1, pred, b2, b3)
    other_ids = {b1: 'id1', b2: 'id3', b3: 'id2'}

    assert (
            encode_first_degree(quad, 'id1', bnode_ids) ==
            encode_first_degree(quad, 'id1', other_ids))


@pytest.mark.parametrize('lit, expected', [
    (Literal('Alice'), '"Alice"'),
    (Literal('Alice', datatype=XSD.string), '"Alice"'),
    (Literal('Hello', lang='en'), '"Hello"@en'),
    (
        Literal(30),
        '"30"^^<http://www.w3.org/2001/XMLSchema#integer>'),
    (
        Literal('true', datatype=XSD.boolean),
        '"true"^^<http://www.w3.org/2001/XMLSchema#boolean>'),
])
def test_encode_literal(lit, expected):
    assert encode_literal(lit) == expected


def test_escape_lexical():
    assert escape_lexical('Line 1\nLine 2\r"Quote"\\ Backslash') == (
            'Line 1\\nLine 2\\r\\"Quote\\"\\\\ Backslash')
    assert escape_lexical('a\tb\x08c\x0cd') == 'a\\tb\\bc\\fd'
    assert escape_lexical('\x00\x01\x1f\x7f') == (
            '\\u0000\\u0001\\u001F\\u007F')


def test_escape_lexical_keeps_unicode():
    assert escape_lexical('café ☃') == 'café ☃'


def test_encode_canonical():
    labels = {b1: 'c14n1', b2: 'c14n0'}
    quad = (b1, URIRef(EX + 'knows'), b2, URIRef(EX + 'g'))

    assert encode_canonical(quad, labels) == (
            '_:c14n1 <http://example.org/knows> _:c14n0 '
            '<http://example.org/g> .\n')


def test_encode_canonical_escaped_literal():
    quad = (b1, URIRef(EX + 'text'), Literal('say "hi"\n'), None)

    assert encode_canonical(quad, {b1: 'c14n0'}) == (
            '_:c14n0 <http://example.org/text> "say \\"hi\\"\\n" .\n')
