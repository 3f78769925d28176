import re

from hashlib import sha256, sha384

from rdf_canon.exceptions import UnsupportedHashAlgorithmError

HASH_ALGORITHMS = {
    'sha256': sha256,
    'sha384': sha384,
}
"""Supported digest algorithms, by name."""

DEFAULT_HASH_ALGORITHM = 'sha256'
"""Digest algorithm used when none is configured."""

DEFAULT_PREFIX = 'c14n'
"""Prefix of canonical blank node labels."""

_LABEL_PREFIX_RE = re.compile(r'^[A-Za-z0-9_](?:[A-Za-z0-9_.\-]*[A-Za-z0-9_\-])?$')


class CanonicalizationOptions:
    """
    Configuration of a canonicalization run.

    :param str hash_algorithm: Digest algorithm name, either ``sha256``
        (default) or ``sha384``.
    :param str blank_node_prefix: Prefix of the canonical blank node labels.
        Labels are formed by appending a sequential counter, e.g. ``c14n0``.
    """

    def __init__(
            self, hash_algorithm=DEFAULT_HASH_ALGORITHM,
            blank_node_prefix=DEFAULT_PREFIX):
        algorithm = str(hash_algorithm).lower()
        if algorithm not in HASH_ALGORITHMS:
            raise UnsupportedHashAlgorithmError(hash_algorithm)
        if (
                not isinstance(blank_node_prefix, str) or
                not _LABEL_PREFIX_RE.match(blank_node_prefix)):
            raise ValueError(
                    'Invalid blank node prefix: {!r}'.format(
                        blank_node_prefix))

        self.hash_algorithm = algorithm
        self.blank_node_prefix = blank_node_prefix

    @property
    def hash_fn(self):
        """
        Hash constructor for the configured algorithm.

        :rtype: function
        """
        return HASH_ALGORITHMS[self.hash_algorithm]

    def __repr__(self):
        return '{}(hash_algorithm={!r}, blank_node_prefix={!r})'.format(
                self.__class__.__name__, self.hash_algorithm,
                self.blank_node_prefix)
