"""Base service class for domain services."""


class Service:
    """Marker base for domain services.

    Services own the CMS rules (slug allocation, tag reconciliation, role
    checks) and reach storage only through repository interfaces.
    """
