"""
Binding Core.

Provides:
- SettingsBinder: registration, two-way links with echo suppression, tag lifecycle
- SubscriptionRegistry / Handler / CallbackHandler / BindingEntry: name-keyed handler store
- resolve_property_name / PropertyRef: accessor -> property name
- Signal: synchronous observer used as change notification
- BinderConfig: binder options
"""
from .accessors import PropertyRef, resolve_property_name
from .binder import ChangeSource, SettingsBinder
from .config import BinderConfig
from .errors import (
    BindingError,
    DispatchError,
    HandlerInvocationFailure,
    ReentrantWriteDetected,
    UnsupportedAccessorKind,
)
from .registry import BindingEntry, CallbackHandler, Handler, SubscriptionRegistry
from .signals import Signal


__all__ = [
    "SettingsBinder",
    "ChangeSource",
    "BinderConfig",
    "SubscriptionRegistry",
    "BindingEntry",
    "Handler",
    "CallbackHandler",
    "PropertyRef",
    "resolve_property_name",
    "Signal",
    "BindingError",
    "UnsupportedAccessorKind",
    "HandlerInvocationFailure",
    "DispatchError",
    "ReentrantWriteDetected",
]
