import logging

from operator import itemgetter

from rdflib import BNode, Dataset

from rdf_canon.exceptions import CanonicalizationError
from rdf_canon.hasher import BlankNodeHasher
from rdf_canon.nquads import encode_canonical
from rdf_canon.options import CanonicalizationOptions
from rdf_canon.state import CanonicalizationState, normalize_statement

__doc__ = """
Generate a canonical serialization and cryptographic hash of an RDF dataset.

Blank nodes are relabeled deterministically, so that two datasets that only
differ in their blank node labels produce the same canonical N-Quads
document, e.g.::

    _:alice <http://xmlns.com/foaf/0.1/name> "Alice" .

and::

    _:x <http://xmlns.com/foaf/0.1/name> "Alice" .

both canonicalize to::

    _:c14n0 <http://xmlns.com/foaf/0.1/name> "Alice" .

Lines are sorted in code point order and each one ends with a newline.

Blank nodes are first told apart by the quads they directly appear in
(first degree hash). Those that remain indistinguishable are labeled by
exploring their neighborhood (N-degree hash), which has no upper bound on
cost for highly symmetric inputs.

**Note:** no timeout or permutation budget is enforced; a caller handling
untrusted input should run canonicalization under its own time limit.
"""

logger = logging.getLogger(__name__)


class CanonicalizedDataset:
    """
    Outcome of the canonical labeling of a dataset.

    :ivar list quads: De-duplicated input quads.
    :ivar dict issued_identifiers: Blank node to canonical label.
    :ivar CanonicalizationOptions options: Options of the run.
    """

    def __init__(self, quads, issued_identifiers, options):
        self.quads = quads
        self.issued_identifiers = issued_identifiers
        self.options = options

    def identifier_map(self):
        """
        Map of input blank node labels to canonical labels.

        :rtype: dict
        """
        return {
            str(bnode): label
            for bnode, label in self.issued_identifiers.items()}

    def to_nquads(self):
        """
        Canonical N-Quads serialization.

        One line per quad, blank nodes replaced by their canonical labels,
        lines sorted in code point order.

        :rtype: str
        """
        return ''.join(sorted(
            encode_canonical(quad, self.issued_identifiers)
            for quad in self.quads))

    def digest(self):
        """
        Digest of the canonical N-Quads document, UTF-8 encoded, computed
        with the hash algorithm of the run options.

        :rtype: bytes
        """
        return self.options.hash_fn(self.to_nquads().encode('utf-8')).digest()

    def to_dataset(self):
        """
        rdflib dataset holding the relabeled quads.

        :rtype: rdflib.Dataset
        """
        bnodes = {
            bnode: BNode(label)
            for bnode, label in self.issued_identifiers.items()}
        ds = Dataset()
        for quad in self.quads:
            quad = tuple(bnodes.get(term, term) for term in quad)
            # A triple lands in the default graph.
            ds.add(quad[:3] if quad[3] is None else quad)

        return ds


def canonicalize_dataset(source, options=None):
    """
    Assign canonical labels to all the blank nodes of an RDF source.

    :param source: Dataset, graph or iterable of quads. See
        :func:`rdf_canon.state.iter_quads`.
    :param CanonicalizationOptions options: Run options.

    :rtype: CanonicalizedDataset
    """
    if options is None:
        options = CanonicalizationOptions()
    hasher = BlankNodeHasher(options.hash_fn)
    state = CanonicalizationState.from_source(
            source, options.blank_node_prefix)

    hash_to_bnodes = {}
    for identifier in state.mentions:
        first_degree_hash = hasher.hash_first_degree_quads(state, identifier)
        state.first_degree_hashes[identifier] = first_degree_hash
        hash_to_bnodes.setdefault(first_degree_hash, []).append(identifier)

    shared_hashes = []
    for first_degree_hash, identifiers in sorted(hash_to_bnodes.items()):
        if len(identifiers) == 1:
            state.canonical_issuer.issue(identifiers[0])
        else:
            shared_hashes.append(first_degree_hash)

    for first_degree_hash in shared_hashes:
        _issue_shared(state, hasher, hash_to_bnodes[first_degree_hash])

    issued = {}
    for bnode, identifier in state.bnode_ids.items():
        label = state.canonical_issuer.get(identifier)
        if label is None:
            raise CanonicalizationError(
                    'No canonical label issued for blank node {} ({}).'.format(
                        bnode.n3(), identifier))
        issued[bnode] = label

    return CanonicalizedDataset(state.quads, issued, options)


def _issue_shared(state, hasher, identifiers):
    """
    Issue canonical labels for blank nodes sharing a first degree hash.

    :param CanonicalizationState state: Canonicalization state.
    :param BlankNodeHasher hasher: Hasher of the run.
    :param list identifiers: Input identifiers sharing the hash.
    """
    logger.debug(
            'Resolving %d blank nodes with a shared first degree hash.',
            len(identifiers))
    hash_path_list = []
    for identifier in identifiers:
        if state.canonical_issuer.is_issued(identifier):
            continue
        path_issuer = state.canonical_issuer.clone()
        path_issuer.issue(identifier)
        n_degree_hash, issuer = hasher.hash_n_degree_quads(
                state, identifier, path_issuer)
        logger.debug('N-degree hash of %s: %s', identifier, n_degree_hash)
        hash_path_list.append((n_degree_hash, issuer))

    for _, issuer in sorted(hash_path_list, key=itemgetter(0)):
        for existing in issuer.order:
            state.canonical_issuer.issue(existing)


def canonicalize(source, options=None):
    """
    Generate the canonical N-Quads serialization of an RDF source.

    :param source: Dataset, graph or iterable of quads.
    :param CanonicalizationOptions options: Run options.

    :rtype: str
    :return: Canonical N-Quads document.
    """
    return canonicalize_dataset(source, options).to_nquads()


def canonicalize_graph(graph, options=None):
    """
    Generate the canonical N-Quads serialization of a single graph.

    The triples of the graph are serialized in the default graph, whatever
    the graph identifier or the store it lives in.

    :param graph: ``rdflib.Graph``, or iterable of triples. The graph name
        of a quad in the iterable is dropped.
    :param CanonicalizationOptions options: Run options.

    :rtype: str
    """
    if hasattr(graph, 'triples'):
        triples = graph.triples((None, None, None))
    else:
        triples = (normalize_statement(stmt)[:3] for stmt in graph)

    return canonicalize(
            ((s, p, o, None) for s, p, o in triples), options)


def canonicalize_nquads(data, options=None):
    """
    Parse an N-Quads document and canonicalize it.

    :param str data: N-Quads document.
    :param CanonicalizationOptions options: Run options.

    :rtype: str
    """
    ds = Dataset()
    ds.parse(data=data, format='nquads')

    return canonicalize(ds, options)


def is_isomorphic(a, b, options=None):
    """
    Whether two RDF sources are equal up to blank node relabeling.

    :rtype: bool
    """
    return canonicalize(a, options) == canonicalize(b, options)


def is_isomorphic_graphs(a, b, options=None):
    """
    Whether two graphs are equal up to blank node relabeling.

    :rtype: bool
    """
    return canonicalize_graph(a, options) == canonicalize_graph(b, options)


def get_hash(source, options=None):
    """
    Calculate the hash of an RDF source.

    The digest is computed over the canonical N-Quads document, UTF-8
    encoded, with the algorithm configured in ``options``.

    :param source: Dataset, graph or iterable of quads.
    :param CanonicalizationOptions options: Run options.

    :rtype: bytes
    :return: Dataset digest.
    """
    return canonicalize_dataset(source, options).digest()
