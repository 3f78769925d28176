from rdf_canon.canon import (
    CanonicalizedDataset,
    canonicalize,
    canonicalize_dataset,
    canonicalize_graph,
    canonicalize_nquads,
    get_hash,
    is_isomorphic,
    is_isomorphic_graphs,
)
from rdf_canon.exceptions import (
    CanonicalizationError,
    MalformedQuadError,
    RdfCanonError,
    UnsupportedHashAlgorithmError,
)
from rdf_canon.options import CanonicalizationOptions

__all__ = [
    'CanonicalizationError',
    'CanonicalizationOptions',
    'CanonicalizedDataset',
    'MalformedQuadError',
    'RdfCanonError',
    'UnsupportedHashAlgorithmError',
    'canonicalize',
    'canonicalize_dataset',
    'canonicalize_graph',
    'canonicalize_nquads',
    'get_hash',
    'is_isomorphic',
    'is_isomorphic_graphs',
]
