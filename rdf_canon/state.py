import logging

from rdflib import BNode, Literal, URIRef
from rdflib.graph import DATASET_DEFAULT_GRAPH_ID, Graph
from rdflib.term import _is_valid_uri

from rdf_canon.exceptions import MalformedQuadError
from rdf_canon.issuer import IdentifierIssuer

__doc__ = """
Input normalization and per-run canonicalization state.
"""

logger = logging.getLogger(__name__)

INPUT_ID_PREFIX = 'n'
"""Prefix of the input identifiers assigned to blank nodes."""

BNODE_POSITIONS = ((0, 'subject'), (2, 'object'), (3, 'graph'))
"""Quad positions that can hold a blank node, with their names."""

_ALLOWED_TERMS = (
    ('subject', (URIRef, BNode)),
    ('predicate', (URIRef,)),
    ('object', (URIRef, BNode, Literal)),
    ('graph', (URIRef, BNode)),
)


def iter_quads(source):
    """
    Iterate over the statements of an RDF source as quads.

    :param source: A context-aware rdflib store (``Dataset``,
        ``ConjunctiveGraph``), a plain ``rdflib.Graph``, or an iterable of
        triples and/or quads.

    :rtype: Iterator[tuple]
    :return: ``(s, p, o, g)`` tuples; ``g`` is ``None`` for the default
        graph.
    """
    default_context = getattr(source, 'default_context', None)
    if default_context is not None:
        default_ids = {DATASET_DEFAULT_GRAPH_ID, default_context.identifier}
        for s, p, o, g in source.quads((None, None, None, None)):
            if isinstance(g, Graph):
                g = g.identifier
            if g in default_ids:
                g = None
            yield s, p, o, g
    elif isinstance(source, Graph):
        for s, p, o in source.triples((None, None, None)):
            yield s, p, o, None
    else:
        for stmt in source:
            yield normalize_statement(stmt)


def normalize_statement(stmt):
    """
    Turn a plain triple or quad tuple into a quad.
    """
    stmt = tuple(stmt)
    if len(stmt) == 3:
        return stmt + (None,)
    if len(stmt) == 4:
        s, p, o, g = stmt
        if isinstance(g, Graph):
            g = g.identifier
        if g == DATASET_DEFAULT_GRAPH_ID:
            g = None
        return s, p, o, g

    raise MalformedQuadError(
            'Expected a triple or a quad, got {} terms: {!r}'.format(
                len(stmt), stmt))


def validate_quad(quad):
    """
    Verify that every term of a quad is allowed in its position.

    :param tuple quad: Quad to validate.

    :raise MalformedQuadError: If a term is not allowed in its position, or
        if an IRI (a literal datatype included) cannot be serialized.
    """
    for (position, allowed), term in zip(_ALLOWED_TERMS, quad):
        if term is None and position == 'graph':
            continue
        if not isinstance(term, allowed):
            raise MalformedQuadError(
                    'Term {!r} is not allowed in {} position of {!r}'.format(
                        term, position, quad),
                    position=position, term=term)

        iri = term.datatype if isinstance(term, Literal) else term
        if isinstance(iri, URIRef) and not _is_valid_uri(iri):
            raise MalformedQuadError(
                    'IRI {!r} in {} position of {!r} cannot be '
                    'serialized'.format(str(iri), position, quad),
                    position=position, term=term)


def quad_bnodes(quad):
    """
    Blank nodes in a quad, in position order and without repetitions.

    :rtype: list
    """
    bnodes = []
    for i, _ in BNODE_POSITIONS:
        term = quad[i]
        if isinstance(term, BNode) and term not in bnodes:
            bnodes.append(term)

    return bnodes


class CanonicalizationState:
    """
    State shared by all the steps of one canonicalization run.

    :param list quads: De-duplicated, validated quads.
    :param str prefix: Prefix of the canonical labels.

    :ivar dict bnode_ids: Blank node term to input identifier.
    :ivar dict mentions: Input identifier to the list of quads mentioning
        the blank node (its mention set).
    :ivar dict first_degree_hashes: Input identifier to first degree hash.
        Filled in by the driver.
    :ivar IdentifierIssuer canonical_issuer: Issuer of canonical labels.
    """

    def __init__(self, quads, prefix):
        self.quads = quads
        self.bnode_ids = {}
        self.mentions = {}
        self.first_degree_hashes = {}
        self.canonical_issuer = IdentifierIssuer(prefix)

        for quad in quads:
            for bnode in quad_bnodes(quad):
                identifier = self.bnode_ids.get(bnode)
                if identifier is None:
                    identifier = '{}{}'.format(
                            INPUT_ID_PREFIX, len(self.bnode_ids))
                    self.bnode_ids[bnode] = identifier
                self.mentions.setdefault(identifier, []).append(quad)

        logger.debug(
                'Canonicalization state: %d quads, %d blank nodes.',
                len(self.quads), len(self.bnode_ids))

    @classmethod
    def from_source(cls, source, prefix):
        """
        Build the state from any source accepted by :func:`iter_quads`.

        Duplicate quads are dropped; the first occurrence keeps its place.

        :rtype: CanonicalizationState
        """
        quads = {}
        for quad in iter_quads(source):
            validate_quad(quad)
            quads.setdefault(quad, None)

        return cls(list(quads), prefix)
