from rdflib import BNode, Literal, URIRef
from rdflib.namespace import XSD

__doc__ = """
Canonical N-Quads rendering of terms and quads.

Two renderings are provided: the degenerate one used for first degree
hashing, where every blank node is replaced by one of two fixed placeholders,
and the canonical one used for the final output, where every blank node is
replaced by its canonical label.

Both produce one line per quad, terminated by `` .\\n``, with terms in the
canonical N-Quads form::

    <http://ex.org/a> # An IRI
    _:c14n0 # A blank node
    "Ahoy" # A xsd:string literal
    "3"^^<http://www.w3.org/2001/XMLSchema#integer> # A typed literal
    "Ahoy"@en # A language-tagged literal
"""

REF_BNODE = '_:a'
"""Placeholder for the reference blank node in first degree hashing."""

OTHER_BNODE = '_:z'
"""Placeholder for any other blank node in first degree hashing."""

QUAD_END = ' .\n'
"""End of a quad line."""

_ECHARS = {
    0x08: '\\b',
    0x09: '\\t',
    0x0A: '\\n',
    0x0C: '\\f',
    0x0D: '\\r',
    0x22: '\\"',
    0x5C: '\\\\',
}
_LITERAL_ESCAPES = dict(_ECHARS)
_LITERAL_ESCAPES.update({
    cp: '\\u{:04X}'.format(cp)
    for cp in list(range(0x20)) + [0x7F]
    if cp not in _ECHARS})


def escape_lexical(value):
    """
    Escape the lexical form of a literal.

    :param str value: Lexical form.

    :rtype: str
    """
    return value.translate(_LITERAL_ESCAPES)


def encode_literal(lit):
    """
    Encode a literal.

    The ``xsd:string`` datatype is implicit and never written out.

    :param rdflib.Literal lit: Literal to encode.

    :rtype: str
    """
    res = '"' + escape_lexical(str(lit)) + '"'
    if lit.language:
        res += '@' + lit.language
    elif lit.datatype is not None and lit.datatype != XSD.string:
        res += '^^' + lit.datatype.n3()

    return res


def encode_term(term, encode_bnode):
    """
    Encode a single term.

    :param term: Term to encode.
    :type term: rdflib.URIRef or rdflib.BNode or rdflib.Literal
    :param function encode_bnode: Function returning the rendering of a
        blank node.

    :rtype: str
    """
    if isinstance(term, BNode):
        return encode_bnode(term)
    if isinstance(term, Literal):
        return encode_literal(term)
    if isinstance(term, URIRef):
        return term.n3()

    raise TypeError('Cannot encode term {!r}'.format(term))


def encode_quad(quad, encode_bnode):
    """
    Encode a quad as one N-Quads line.

    :param tuple quad: ``(s, p, o, g)`` tuple, ``g`` being ``None`` for the
        default graph.
    :param function encode_bnode: Function returning the rendering of a
        blank node.

    :rtype: str
    """
    s, p, o, g = quad
    parts = [
        encode_term(s, encode_bnode),
        encode_term(p, encode_bnode),
        encode_term(o, encode_bnode),
    ]
    if g is not None:
        parts.append(encode_term(g, encode_bnode))

    return ' '.join(parts) + QUAD_END


def encode_first_degree(quad, reference_id, bnode_ids):
    """
    Encode a quad for first degree hashing.

    Every blank node identified by ``reference_id`` becomes ``_:a``, every
    other blank node becomes ``_:z``, so that the line does not depend on
    any blank node label.

    :param tuple quad: Quad to encode.
    :param str reference_id: Input identifier of the reference blank node.
    :param dict bnode_ids: Map of blank nodes to input identifiers.

    :rtype: str
    """
    def encode_bnode(bnode):
        if bnode_ids.get(bnode) == reference_id:
            return REF_BNODE
        return OTHER_BNODE

    return encode_quad(quad, encode_bnode)


def encode_canonical(quad, labels):
    """
    Encode a quad with canonical blank node labels.

    :param tuple quad: Quad to encode.
    :param dict labels: Map of blank nodes to canonical labels.

    :rtype: str
    """
    return encode_quad(quad, lambda bnode: '_:' + labels[bnode])
