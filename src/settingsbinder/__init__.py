"""
settingsbinder - Two-way binding between observers and a settings object.

Keeps widgets (or any object with a value, a setter and a change
notification) synchronized with named properties of a pydantic settings
model, without update loops.
"""

# Core
from settingsbinder.core import (
    BinderConfig,
    BindingError,
    DispatchError,
    HandlerInvocationFailure,
    PropertyRef,
    ReentrantWriteDetected,
    SettingsBinder,
    Signal,
    UnsupportedAccessorKind,
    resolve_property_name,
)
from settingsbinder.core.logging import setup_logging

# Settings collaborators
from settingsbinder.settings import ObservableSettings, SettingsStore

__version__ = "0.1.0"

__all__ = [
    "SettingsBinder",
    "BinderConfig",
    "ObservableSettings",
    "SettingsStore",
    "PropertyRef",
    "resolve_property_name",
    "Signal",
    "setup_logging",
    "BindingError",
    "UnsupportedAccessorKind",
    "HandlerInvocationFailure",
    "DispatchError",
    "ReentrantWriteDetected",
]
