"""Fault injection shared by the in-memory repositories."""

from blog.domain.error import StoreUnavailableError


class FaultInjectionMixin:
    """Lets tests make the next N calls of an operation fail transiently.

    Operations are named after the repository method, e.g. ``push_reply``.
    A failing call raises before touching any data.
    """

    def __init__(self) -> None:
        self._faults: dict[str, int] = {}

    def inject_fault(self, operation: str, times: int = 1) -> None:
        """Fail the next ``times`` calls of ``operation``."""
        self._faults[operation] = self._faults.get(operation, 0) + times

    def clear_faults(self) -> None:
        """Remove all pending faults."""
        self._faults.clear()

    def _check_fault(self, operation: str) -> None:
        remaining = self._faults.get(operation, 0)
        if remaining:
            self._faults[operation] = remaining - 1
            raise StoreUnavailableError(operation, "injected fault")
