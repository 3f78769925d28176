import logging

from hashlib import sha256
from itertools import permutations

from rdflib import BNode

from rdf_canon.nquads import encode_first_degree

__doc__ = """
First degree and N-degree hashing of blank nodes.

The first degree hash of a blank node only captures the quads the node
appears in, with every blank node label erased. When several blank nodes
share a first degree hash, the N-degree hash tells them apart by exploring
their related blank nodes through every permutation of each group of
indistinguishable neighbors, speculatively labeling them with a cloned
identifier issuer.
"""

logger = logging.getLogger(__name__)

RELATED_POSITIONS = (('s', 0), ('o', 2), ('g', 3))
"""Position tags of related blank nodes, with their index in a quad."""

GRAPH_POSITION = 'g'
"""Position tag of a graph name; the predicate is not hashed for it."""


def is_preferred_path(path, other):
    """
    Whether a path is preferred over another one.

    A shorter path is preferred; between paths of equal length the
    lexicographically smaller or equal one is. The same rule decides both
    which path is chosen and when a partial path is abandoned: a partial
    path can only grow, so once it is not preferred over the chosen path,
    no completion of it can be.

    :param str path: Candidate path.
    :param str other: Path to compare against.

    :rtype: bool
    """
    if len(path) != len(other):
        return len(path) < len(other)

    return path <= other


class BlankNodeHasher:
    """
    Compute first degree and N-degree hashes of blank nodes.

    :param function hash_fn: Hash constructor, e.g. ``hashlib.sha256``.
    """

    def __init__(self, hash_fn=sha256):
        self.hash_fn = hash_fn

    def hash_string(self, data):
        """
        Hex digest of a string, UTF-8 encoded.

        :rtype: str
        """
        return self.hash_fn(data.encode('utf-8')).hexdigest()

    def hash_first_degree_quads(self, state, identifier):
        """
        Hash the quads mentioning a blank node, with labels erased.

        :param CanonicalizationState state: Canonicalization state.
        :param str identifier: Input identifier of the blank node.

        :rtype: str
        """
        nquads = sorted(
                encode_first_degree(quad, identifier, state.bnode_ids)
                for quad in state.mentions.get(identifier, ()))

        return self.hash_string(''.join(nquads))

    def hash_related_blank_node(
            self, state, related, quad, issuer, position):
        """
        Hash a blank node as seen from a quad it shares with another one.

        :param CanonicalizationState state: Canonicalization state.
        :param str related: Input identifier of the related blank node.
        :param tuple quad: Quad in which the related node appears.
        :param IdentifierIssuer issuer: Path identifier issuer.
        :param str position: Position tag of the related node in the quad,
            ``s``, ``o`` or ``g``.

        :rtype: str
        """
        data = position
        if position != GRAPH_POSITION:
            data += quad[1].n3()

        label = state.canonical_issuer.get(related)
        if label is None:
            label = issuer.get(related)
        if label is not None:
            data += '_:' + label
        else:
            data += state.first_degree_hashes[related]

        return self.hash_string(data)

    def create_hash_to_related(self, state, identifier, issuer):
        """
        Group the blank nodes related to a blank node by their related hash.

        :param CanonicalizationState state: Canonicalization state.
        :param str identifier: Input identifier of the blank node.
        :param IdentifierIssuer issuer: Path identifier issuer.

        :rtype: dict
        :return: Related hash to the list of related input identifiers.
        """
        hash_to_related = {}
        for quad in state.mentions[identifier]:
            for position, i in RELATED_POSITIONS:
                term = quad[i]
                if not isinstance(term, BNode):
                    continue
                related = state.bnode_ids[term]
                if related == identifier:
                    continue

                related_hash = self.hash_related_blank_node(
                        state, related, quad, issuer, position)
                related_ids = hash_to_related.setdefault(related_hash, [])
                if related in related_ids:
                    logger.debug(
                            'Skipping duplicate related blank node %s for '
                            'hash %s.', related, related_hash)
                    continue
                related_ids.append(related)

        return hash_to_related

    def hash_n_degree_quads(self, state, identifier, issuer):
        """
        Compute the N-degree hash of a blank node.

        Recursion into related blank nodes is driven by an explicit stack of
        generator frames: a frame yields ``(identifier, issuer)`` to request
        the hash of a related node and receives the ``(hash, issuer)``
        result back.

        :param CanonicalizationState state: Canonicalization state.
        :param str identifier: Input identifier of the blank node.
        :param IdentifierIssuer issuer: Path identifier issuer. It is never
            modified; the returned issuer is a separate object.

        :rtype: tuple
        :return: ``(hash, issuer)``, the issuer holding every temporary label
            issued along the chosen paths.
        """
        frames = [self._n_degree_frame(state, identifier, issuer)]
        result = None
        while frames:
            try:
                request = frames[-1].send(result)
            except StopIteration as e:
                frames.pop()
                result = e.value
            else:
                frames.append(self._n_degree_frame(state, *request))
                result = None

        return result

    def _n_degree_frame(self, state, identifier, issuer):
        """
        One level of N-degree hashing, as a generator.
        """
        hash_to_related = self.create_hash_to_related(
                state, identifier, issuer)

        data_to_hash = []
        for related_hash in sorted(hash_to_related):
            data_to_hash.append(related_hash)
            chosen_path = None
            chosen_issuer = None

            for perm in permutations(sorted(hash_to_related[related_hash])):
                walk = yield from self._walk_permutation(
                        state, perm, issuer, chosen_path)
                if walk is not None:
                    chosen_path, chosen_issuer = walk

            data_to_hash.append(chosen_path)
            issuer = chosen_issuer

        return self.hash_string(''.join(data_to_hash)), issuer

    def _walk_permutation(self, state, perm, issuer, chosen_path):
        """
        Build the path of one permutation of related blank nodes.

        :rtype: tuple or None
        :return: ``(path, issuer)`` if the path is strictly preferred over
            ``chosen_path``, ``None`` otherwise.
        """
        issuer_copy = issuer.clone()
        path = ''
        recursion_list = []

        for related in perm:
            label = state.canonical_issuer.get(related)
            if label is None:
                if not issuer_copy.is_issued(related):
                    recursion_list.append(related)
                label = issuer_copy.issue(related)
            path += '_:' + label
            if chosen_path is not None and not is_preferred_path(
                    path, chosen_path):
                return None

        for related in recursion_list:
            result_hash, result_issuer = yield related, issuer_copy
            path += '_:{}<{}>'.format(
                    issuer_copy.issue(related), result_hash)
            issuer_copy = result_issuer
            if chosen_path is not None and not is_preferred_path(
                    path, chosen_path):
                return None

        if chosen_path is None or (
                path != chosen_path and is_preferred_path(path, chosen_path)):
            return path, issuer_copy

        return None
