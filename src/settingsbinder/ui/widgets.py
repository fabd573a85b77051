"""
Qt Widget Bindings.

Binds common PySide6 widgets to settings properties through a SettingsBinder.

Usage:
    from settingsbinder.ui.widgets import bind_widget, subscribe_widget

    # Two-way (settings <-> widget)
    bind_widget(binder, self.line_edit, lambda s: s.text_box, tag=self)
    bind_widget(binder, self.check_box, lambda s: s.check_box, tag=self)

    # One-way (settings -> widget property)
    subscribe_widget(binder, self.label, "text", lambda s: s.text_box, tag=self)
    subscribe_widget(binder, self.group_box, "enabled", lambda s: s.check_box, tag=self)

    binder.send_updates(self)
"""
from enum import Enum
from typing import Any, Callable, Optional, Type

from PySide6.QtCore import QObject
from PySide6.QtWidgets import (QAbstractSlider, QCheckBox, QComboBox, QDoubleSpinBox,
                               QLineEdit, QSpinBox)

from settingsbinder.core.accessors import Accessor
from settingsbinder.core.binder import SettingsBinder


# Widget type -> (getter, setter, change signal, value type)
# Checked in order, so subclasses must come before their bases.
_WIDGET_BINDINGS = [
    (QCheckBox, "isChecked", "setChecked", "toggled", bool),
    (QLineEdit, "text", "setText", "textChanged", str),
    (QDoubleSpinBox, "value", "setValue", "valueChanged", float),
    (QSpinBox, "value", "setValue", "valueChanged", int),
    (QAbstractSlider, "value", "setValue", "valueChanged", int),
    (QComboBox, "currentIndex", "setCurrentIndex", "currentIndexChanged", int),
]


def _binder_method(binder: SettingsBinder, value_type: type) -> Callable:
    return {
        bool: binder.bind_bool,
        str: binder.bind_str,
        int: binder.bind_int,
        float: binder.bind_float,
    }[value_type]


def bind_widget(binder: SettingsBinder, widget: QObject, accessor: Accessor, tag: Any = None) -> int:
    """
    Two-way bind the primary value of a widget to a settings property.

    Supported: QCheckBox (checked), QLineEdit (text), QSpinBox, QDoubleSpinBox
    and sliders (value), QComboBox (current index).

    Returns:
        Registry entry id.

    Raises:
        TypeError: If the widget type is not supported.
    """
    for widget_type, getter_name, setter_name, signal_name, value_type in _WIDGET_BINDINGS:
        if isinstance(widget, widget_type):
            signal = getattr(widget, signal_name)
            return _binder_method(binder, value_type)(
                getattr(widget, getter_name),
                getattr(widget, setter_name),
                signal.connect,
                signal.disconnect,
                accessor,
                tag,
            )

    raise TypeError(f"No two-way binding for widget type {type(widget).__name__}")


def bind_combo_enum(
    binder: SettingsBinder,
    combo: QComboBox,
    enum_type: Type[Enum],
    accessor: Accessor,
    tag: Any = None
) -> int:
    """
    Two-way bind a combo box to an enum-valued property.

    The combo is filled with the enum member names when it is empty; item i
    stands for the i-th member. While nothing is selected (cleared or being
    refilled) the setting keeps its value.
    """
    name = binder.resolve(accessor)
    members = list(enum_type)
    if combo.count() == 0:
        for member in members:
            combo.addItem(member.name)

    def current():
        index = combo.currentIndex()
        return members[index] if 0 <= index < len(members) else None

    def select(value):
        combo.setCurrentIndex(members.index(enum_type(value)))

    def coerce(value):
        # no selection: write back the current value, which is not a change
        if value is None:
            return binder.settings.get_value(name)
        return enum_type(value)

    signal = combo.currentIndexChanged
    return binder.bind_control(current, select, signal.connect, signal.disconnect, name, tag, coerce=coerce)


def subscribe_widget(
    binder: SettingsBinder,
    widget: QObject,
    prop: str,
    accessor: Accessor,
    tag: Any = None,
    converter: Optional[Callable[[Any], Any]] = None
) -> int:
    """
    One-way bind a settings property to a widget property.

    The widget's Qt setter (set{Prop}) is used when it exists, e.g. "text"
    -> setText, "enabled" -> setEnabled; otherwise the attribute is assigned.

    Raises:
        ValueError: If prop is empty or not a string.
    """
    if not isinstance(prop, str) or not prop:
        raise ValueError(f"Invalid widget property: {prop!r}")
    setter = getattr(widget, f"set{prop[0].upper()}{prop[1:]}", None)
    if setter is None:
        return binder.subscribe_attribute(widget, prop, accessor, tag, converter)
    return binder.subscribe_attribute(widget, setter, accessor, tag, converter)
