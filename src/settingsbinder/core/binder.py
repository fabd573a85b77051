"""
SettingsBinder - Two-way binding between observers and a settings object.

Keeps any number of observers (widgets, or anything with a getter, a setter
and a change notification) in sync with named properties of one settings
object that reports changes by property name.

Usage:
    binder = SettingsBinder(settings)

    # settings -> observer
    binder.subscribe(label.setText, "text_box", tag=form)

    # observer <-> settings
    binder.bind_str(line_edit.text, line_edit.setText,
                    line_edit.textChanged.connect, line_edit.textChanged.disconnect,
                    lambda s: s.text_box, tag=form)

    binder.send_updates(form)      # initial sync
    ...
    binder.remove_handlers(form)   # when the form goes away

All calls must come from the thread that owns the settings object and the
observers (the Qt GUI thread). Nothing here is locked.
"""
from enum import Enum
from typing import Any, Callable, List, Optional, Protocol, Type, TypeVar, runtime_checkable

from loguru import logger

from settingsbinder.core.accessors import Accessor, resolve_property_name
from settingsbinder.core.config import BinderConfig
from settingsbinder.core.errors import DispatchError, HandlerInvocationFailure
from settingsbinder.core.registry import CallbackHandler, SubscriptionRegistry

T = TypeVar('T')
E = TypeVar('E', bound=Enum)


@runtime_checkable
class ChangeSource(Protocol):
    """
    What the binder needs from a settings object.

    property_changed must provide connect/disconnect and emit the property
    name (optionally followed by other arguments) after the value is committed.
    """
    property_changed: Any

    def get_value(self, name: str) -> Any: ...

    def set_value(self, name: str, value: Any) -> None: ...


class _TwoWayLink:
    """Forward listener and echo-suppressed backward handler of one binding."""

    def __init__(
        self,
        settings: ChangeSource,
        property_name: str,
        getter: Callable[[], Any],
        setter: Callable[[Any], Any],
        attach: Callable[[Callable], Any],
        detach: Callable[[Callable], Any],
        coerce: Optional[Callable[[Any], Any]] = None
    ):
        self.settings = settings
        self.property_name = property_name
        self.getter = getter
        self.setter = setter
        self.attach = attach
        self.detach = detach
        self.coerce = coerce
        # one bound method object, so detach matches what attach connected
        self.forward = self.on_observer_changed

    def on_observer_changed(self, *args) -> None:
        """Observer -> settings. Event arguments are ignored, the getter is authoritative."""
        value = self.getter()
        if self.coerce is not None:
            value = self.coerce(value)
        self.settings.set_value(self.property_name, value)

    def on_settings_changed(self, value: Any) -> None:
        """Settings -> observer, with the forward listener detached during the write."""
        if self.getter() == value:
            return

        self.detach(self.forward)
        try:
            self.setter(value)
        finally:
            self.attach(self.forward)


class SettingsBinder:
    """
    Binding coordinator for one settings object.

    Args:
        settings: The change source (see ChangeSource).
        config: Binder options; defaults to BinderConfig().
        on_error: Optional callback receiving each HandlerInvocationFailure.
            When given, failures are reported to it instead of being raised.
    """

    def __init__(
        self,
        settings: ChangeSource,
        config: Optional[BinderConfig] = None,
        on_error: Optional[Callable[[HandlerInvocationFailure], Any]] = None
    ):
        self._settings = settings
        self._config = config or BinderConfig()
        self._on_error = on_error
        self._registry = SubscriptionRegistry()
        self._closed = False

        settings.property_changed.connect(self._on_property_changed)
        logger.debug(f"SettingsBinder attached to {type(settings).__name__}")

    @property
    def settings(self) -> ChangeSource:
        return self._settings

    @property
    def registry(self) -> SubscriptionRegistry:
        return self._registry

    @property
    def config(self) -> BinderConfig:
        return self._config

    def resolve(self, accessor: Accessor) -> str:
        """Resolve an accessor against this binder's settings type."""
        return resolve_property_name(accessor, type(self._settings))

    # --- One-way (settings -> observer) ---

    def subscribe(
        self,
        callback: Callable[[T], Any],
        accessor: Accessor,
        tag: Any = None,
        coerce: Optional[Callable[[Any], T]] = None
    ) -> int:
        """
        Call callback with the new value each time the property changes.

        Nothing is sent at subscription time; use send_updates(tag).

        Returns:
            Registry entry id.
        """
        name = self.resolve(accessor)
        return self._registry.subscribe(name, CallbackHandler(callback, coerce), tag)

    def subscribe_attribute(
        self,
        target: Any,
        attribute: Any,
        accessor: Accessor,
        tag: Any = None,
        converter: Optional[Callable[[Any], Any]] = None
    ) -> int:
        """
        Mirror a property onto target.

        Args:
            target: Object receiving the value.
            attribute: Attribute name assigned with setattr, or a callable
                setter taking the value.
            accessor: Settings property.
            tag: Group tag.
            converter: Optional value conversion.
        """
        if callable(attribute):
            assign = attribute
        elif isinstance(attribute, str) and attribute:
            def assign(value, target=target, attribute=attribute):
                setattr(target, attribute, value)
        else:
            raise TypeError(f"attribute must be a name or a callable, got {attribute!r}")

        return self.subscribe(assign, accessor, tag, coerce=converter)

    # --- Two-way (observer <-> settings) ---

    def bind_control(
        self,
        getter: Callable[[], T],
        setter: Callable[[T], Any],
        attach: Callable[[Callable], Any],
        detach: Callable[[Callable], Any],
        accessor: Accessor,
        tag: Any = None,
        coerce: Optional[Callable[[Any], T]] = None
    ) -> int:
        """
        Bind an observer value to a settings property in both directions.

        Args:
            getter: Returns the observer's current value.
            setter: Writes a value into the observer.
            attach: Connects a listener to the observer's change notification.
            detach: Disconnects that listener.
            accessor: Settings property.
            tag: Group tag.
            coerce: Conversion applied to observer values before they are
                written into settings.

        Returns:
            Registry entry id of the backward handler.
        """
        name = self.resolve(accessor)
        link = _TwoWayLink(self._settings, name, getter, setter, attach, detach, coerce)
        attach(link.forward)
        entry_id = self._registry.subscribe(name, CallbackHandler(link.on_settings_changed), tag)
        logger.debug(f"Two-way binding #{entry_id} on '{name}'")
        return entry_id

    def bind_bool(self, getter, setter, attach, detach, accessor: Accessor, tag: Any = None) -> int:
        return self.bind_control(getter, setter, attach, detach, accessor, tag, coerce=bool)

    def bind_str(self, getter, setter, attach, detach, accessor: Accessor, tag: Any = None) -> int:
        return self.bind_control(getter, setter, attach, detach, accessor, tag, coerce=str)

    def bind_int(self, getter, setter, attach, detach, accessor: Accessor, tag: Any = None) -> int:
        return self.bind_control(getter, setter, attach, detach, accessor, tag, coerce=int)

    def bind_float(self, getter, setter, attach, detach, accessor: Accessor, tag: Any = None) -> int:
        return self.bind_control(getter, setter, attach, detach, accessor, tag, coerce=float)

    def bind_enum(
        self,
        enum_type: Type[E],
        getter,
        setter,
        attach,
        detach,
        accessor: Accessor,
        tag: Any = None
    ) -> int:
        """Enumerated binding; observer values may be members or raw values."""
        return self.bind_control(getter, setter, attach, detach, accessor, tag, coerce=enum_type)

    # --- Group lifecycle ---

    def remove_handlers(self, tag: Any) -> int:
        """
        Remove every binding created with tag. Returns the number of entries removed.

        Only the settings -> observer direction is removed. A two-way
        binding's forward listener stays connected to the observer, so a
        plain observer keeps writing into settings after removal. Qt signals
        hold that listener weakly, so for widgets it stops once the removed
        link is garbage-collected.
        """
        return self._registry.remove_by_tag(tag)

    def send_updates(self, tag: Any) -> None:
        """Push current settings values to every binding created with tag (None is ignored)."""
        failures = self._registry.resend_by_tag(tag, self._settings.get_value)
        self._report(None, failures)

    def close(self) -> None:
        """Detach from the settings object and drop every binding."""
        if self._closed:
            return
        self._settings.property_changed.disconnect(self._on_property_changed)
        self._registry.clear()
        self._closed = True
        logger.debug(f"SettingsBinder detached from {type(self._settings).__name__}")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    # --- Change dispatch ---

    def _on_property_changed(self, name: str, *args) -> None:
        value = self._settings.get_value(name)
        if self._config.trace_dispatch:
            logger.debug(f"Dispatch '{name}' = {value!r}")
        failures = self._registry.dispatch(name, value)
        self._report(name, failures)

    def _report(self, name: Optional[str], failures: List[HandlerInvocationFailure]) -> None:
        if not failures:
            return
        if self._on_error is not None:
            for failure in failures:
                self._on_error(failure)
            return
        if self._config.error_policy == "raise":
            raise DispatchError(name, failures)
