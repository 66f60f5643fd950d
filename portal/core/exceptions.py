# portal/core/exceptions.py


class PortalError(Exception):
    pass


class AuthenticationError(PortalError):
    pass


class StoreError(PortalError):
    """A query against the relational store failed."""
