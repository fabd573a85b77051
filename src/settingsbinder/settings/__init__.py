"""
Settings collaborators: an observable pydantic model and its file store.
"""
from .model import ObservableSettings
from .store import SettingsStore

__all__ = ["ObservableSettings", "SettingsStore"]
