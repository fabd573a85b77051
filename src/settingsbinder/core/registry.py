"""
Subscription Registry.

Ordered store of (property name -> handler) associations. Handlers of any
value type live side by side behind the Handler interface; entries carry an
optional tag so a whole group can be removed or refreshed at once.
"""
import itertools
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterator, List, Optional, TypeVar

from loguru import logger

from settingsbinder.core.errors import HandlerInvocationFailure

T = TypeVar('T')


class Handler(ABC):
    """Type-erased receiver of property values."""

    @abstractmethod
    def send_event(self, value: Any) -> None:
        """Deliver a newly changed value."""


class CallbackHandler(Handler, Generic[T]):
    """
    Handler wrapping a typed callback.

    Args:
        callback: Called with the (optionally coerced) value.
        coerce: Optional conversion applied before the callback runs.
    """

    def __init__(self, callback: Callable[[T], Any], coerce: Optional[Callable[[Any], T]] = None):
        if not callable(callback):
            raise TypeError(f"callback must be callable, got {type(callback).__name__}")
        self.callback = callback
        self.coerce = coerce

    def send_event(self, value: Any) -> None:
        if self.coerce is not None:
            value = self.coerce(value)
        self.callback(value)

    def __repr__(self) -> str:
        name = getattr(self.callback, "__qualname__", repr(self.callback))
        return f"CallbackHandler({name})"


@dataclass(eq=False)
class BindingEntry:
    """One (property, handler, tag) association."""
    entry_id: int
    property_name: str
    handler: Handler
    tag: Any = None


class SubscriptionRegistry:
    """
    Name-keyed handler registry.

    Entries are kept in registration order. Dispatch iterates a snapshot, so
    entries removed while a pass is running still receive that pass.
    """

    def __init__(self):
        self._entries: List[BindingEntry] = []
        self._ids = itertools.count(1)

    def subscribe(self, property_name: str, handler: Handler, tag: Any = None) -> int:
        """
        Append an entry.

        Returns:
            The entry id.
        """
        if not isinstance(property_name, str) or not property_name:
            raise ValueError(f"Invalid property name: {property_name!r}")
        if not isinstance(handler, Handler):
            raise TypeError(f"handler must be a Handler, got {type(handler).__name__}")

        entry = BindingEntry(next(self._ids), property_name, handler, tag)
        self._entries.append(entry)
        logger.debug(f"Subscribed #{entry.entry_id} {handler!r} to '{property_name}' (tag={tag!r})")
        return entry.entry_id

    def dispatch(self, property_name: str, value: Any) -> List[HandlerInvocationFailure]:
        """
        Send value to every handler registered under property_name.

        A failing handler does not stop the pass.

        Returns:
            Failures of this pass, in dispatch order.
        """
        failures = []
        for entry in list(self._entries):
            if entry.property_name != property_name:
                continue
            failure = self._invoke(entry, value)
            if failure is not None:
                failures.append(failure)
        return failures

    def remove_by_tag(self, tag: Any) -> int:
        """
        Remove every entry whose tag equals tag. None matches None-tagged entries.

        Returns:
            Number of entries removed.
        """
        kept = [entry for entry in self._entries if not entry.tag == tag]
        removed = len(self._entries) - len(kept)
        self._entries = kept
        if removed:
            logger.debug(f"Removed {removed} handler(s) with tag {tag!r}")
        return removed

    def resend_by_tag(self, tag: Any, read_value: Callable[[str], Any]) -> List[HandlerInvocationFailure]:
        """
        Send the current value of each entry's property to entries tagged tag.

        A None tag never matches here: untagged bindings are not a group.
        """
        if tag is None:
            return []

        failures = []
        for entry in list(self._entries):
            if entry.tag is None or not entry.tag == tag:
                continue
            try:
                value = read_value(entry.property_name)
            except Exception as e:
                failures.append(self._failure(entry, e))
                continue
            failure = self._invoke(entry, value)
            if failure is not None:
                failures.append(failure)
        return failures

    def entries_for(self, tag: Any) -> List[BindingEntry]:
        return [entry for entry in self._entries if entry.tag == tag]

    def property_names(self) -> List[str]:
        """Distinct property names in first-registration order."""
        return list(dict.fromkeys(entry.property_name for entry in self._entries))

    def clear(self) -> None:
        self._entries = []

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[BindingEntry]:
        return iter(list(self._entries))

    def _invoke(self, entry: BindingEntry, value: Any) -> Optional[HandlerInvocationFailure]:
        try:
            entry.handler.send_event(value)
        except Exception as e:
            return self._failure(entry, e)
        return None

    @staticmethod
    def _failure(entry: BindingEntry, error: Exception) -> HandlerInvocationFailure:
        failure = HandlerInvocationFailure(entry.property_name, entry, error)
        failure.__cause__ = error
        logger.error(str(failure))
        return failure
