"""
Binding Errors.

All exceptions raised by the binding core derive from BindingError.
"""
from typing import Any, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from settingsbinder.core.registry import BindingEntry


class BindingError(Exception):
    """Base class for binding engine errors."""
    pass


class UnsupportedAccessorKind(BindingError, TypeError):
    """Raised when a property accessor is not a direct property read."""

    def __init__(self, accessor: Any, reason: str):
        self.accessor = accessor
        self.reason = reason
        super().__init__(f"Unsupported property accessor {accessor!r}: {reason}")


class HandlerInvocationFailure(BindingError):
    """
    A registered handler raised while receiving a value.

    Attributes:
        property_name: Property whose change was being delivered.
        entry: The registry entry that failed.
        original: The exception raised by the handler.
    """

    def __init__(self, property_name: str, entry: 'BindingEntry', original: BaseException):
        self.property_name = property_name
        self.entry = entry
        self.original = original
        super().__init__(
            f"Handler #{entry.entry_id} for '{property_name}' failed: "
            f"{type(original).__name__}: {original}"
        )


class DispatchError(BindingError):
    """Aggregate of the handler failures from one dispatch or resend pass."""

    def __init__(self, property_name: Optional[str], failures: List[HandlerInvocationFailure]):
        self.property_name = property_name
        self.failures = list(failures)
        where = f"'{property_name}'" if property_name else "resend"
        super().__init__(f"{len(self.failures)} handler(s) failed during {where}")


class ReentrantWriteDetected(BindingError):
    """
    A two-way binding wrote back into settings while the observer was being
    updated from settings. The binder never raises this itself; observers
    used in tests raise it to prove echo suppression holds.
    """
    pass
