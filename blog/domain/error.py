"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error (content length, malformed identifiers)."""

    pass


class NotAuthorizedError(DomainError):
    """Raised when a user attempts to modify content they don't own."""

    def __init__(self, action: str, resource: str, resource_id: str, user_id: str):
        self.action = action
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(
            f"User {user_id} is not authorized to {action} {resource} {resource_id}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class StoreUnavailableError(DomainError):
    """Transient store failure (timeout, lost connection).

    Raised by repositories only when the operation was not applied,
    so the caller may safely retry it. ``rolled_back`` is set when the
    store also discarded the request's earlier writes, as a PostgreSQL
    transaction does after a connection-level failure.
    """

    def __init__(self, operation: str, detail: str = "", rolled_back: bool = False):
        self.operation = operation
        self.rolled_back = rolled_back
        super().__init__(
            f"Store unavailable during {operation}" + (f": {detail}" if detail else "")
        )
