from rdf_canon.issuer import IdentifierIssuer


def test_issue_sequential():
    issuer = IdentifierIssuer('c14n')

    assert issuer.issue('x') == 'c14n0'
    assert issuer.issue('y') == 'c14n1'
    assert issuer.issue('z') == 'c14n2'
    assert len(issuer) == 3


def test_issue_idempotent():
    issuer = IdentifierIssuer('b')
    issuer.issue('x')
    issuer.issue('y')

    assert issuer.issue('x') == 'b0'
    assert len(issuer) == 2
    assert issuer.order == ['x', 'y']


def test_is_issued():
    issuer = IdentifierIssuer('c14n')
    issuer.issue('x')

    assert issuer.is_issued('x')
    assert not issuer.is_issued('y')
    assert 'x' in issuer
    assert issuer.get('x') == 'c14n0'
    assert issuer.get('y') is None


def test_clone_is_independent():
    """
    Issuing on a clone leaves the original untouched, and vice versa.
    """
    issuer = IdentifierIssuer('c14n')
    issuer.issue('x')

    clone = issuer.clone()
    assert clone.order == ['x']
    assert clone.issue('y') == 'c14n1'
    assert not issuer.is_issued('y')

    assert issuer.issue('z') == 'c14n1'
    assert not clone.is_issued('z')
    assert clone.order == ['x', 'y']
    assert issuer.order == ['x', 'z']


def test_clone_keeps_prefix_and_counter():
    issuer = IdentifierIssuer('b')
    for identifier in ('n3', 'n1', 'n2'):
        issuer.issue(identifier)

    clone = issuer.clone()
    assert clone.prefix == 'b'
    assert [clone.get(i) for i in clone.order] == ['b0', 'b1', 'b2']
    assert clone.order == ['n3', 'n1', 'n2']
    assert clone.issue('n0') == 'b3'

