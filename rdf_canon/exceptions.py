class RdfCanonError(Exception):
    """
    Base class for all canonicalization errors.
    """


class MalformedQuadError(RdfCanonError, ValueError):
    """
    Raised when an input statement cannot be part of an RDF dataset.

    E.g. a blank node in predicate position, or a literal used as a subject.
    """

    def __init__(self, message, position=None, term=None):
        super().__init__(message)
        self.position = position
        self.term = term


class UnsupportedHashAlgorithmError(RdfCanonError, ValueError):
    """
    Raised when the configured digest algorithm is not supported.
    """

    def __init__(self, algorithm):
        super().__init__(
                'Unsupported hash algorithm: {}'.format(algorithm))
        self.algorithm = algorithm


class CanonicalizationError(RdfCanonError):
    """
    Raised when a canonicalization run ends in an inconsistent state.
    """
