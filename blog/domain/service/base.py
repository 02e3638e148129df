"""Base class for domain services."""


class Service:
    """Marker base for domain services.

    Services own the rules that span entities, such as keeping a post's
    comment count in step with its comment tree.
    """
