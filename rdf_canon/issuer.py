class IdentifierIssuer:
    """
    Issue sequential blank node labels in first-seen order.

    Labels are formed from a prefix and a zero-based counter. The counter
    always equals the number of identifiers issued so far, and the issuance
    order is retained, so that a clone replays exactly the same history.

    :param str prefix: Label prefix.
    """

    def __init__(self, prefix):
        self.prefix = prefix
        # Insertion order of this dict is the issuance order.
        self._issued = {}

    def issue(self, identifier):
        """
        Issue a label for an input identifier.

        If a label has already been issued for the identifier, the same
        label is returned and nothing changes.

        :param str identifier: Input blank node identifier.

        :rtype: str
        :return: Issued label, without the ``_:`` prefix.
        """
        label = self._issued.get(identifier)
        if label is None:
            label = '{}{}'.format(self.prefix, len(self._issued))
            self._issued[identifier] = label

        return label

    def is_issued(self, identifier):
        return identifier in self._issued

    def get(self, identifier):
        """
        Label issued for an identifier, or ``None`` if there is none yet.
        """
        return self._issued.get(identifier)

    def clone(self):
        """
        Independent copy of this issuer.

        Labels are immutable strings, so a shallow copy of the mapping shares
        no mutable state with the original.

        :rtype: IdentifierIssuer
        """
        other = self.__class__(self.prefix)
        other._issued = self._issued.copy()

        return other

    @property
    def order(self):
        """
        Input identifiers in the order labels were issued for them.

        :rtype: list
        """
        return list(self._issued)

    def __contains__(self, identifier):
        return identifier in self._issued

    def __len__(self):
        return len(self._issued)

    def __repr__(self):
        return '<{} prefix={!r} issued={}>'.format(
                self.__class__.__name__, self.prefix, len(self._issued))
