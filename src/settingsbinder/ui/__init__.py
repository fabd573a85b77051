"""
PySide6 widget adapters for SettingsBinder.
"""
from .widgets import bind_combo_enum, bind_widget, subscribe_widget

__all__ = ["bind_widget", "bind_combo_enum", "subscribe_widget"]
