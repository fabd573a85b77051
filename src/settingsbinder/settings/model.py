"""
Observable Settings Model.

A pydantic model that reports assignments to its fields by name, so it can
serve as the change source of a SettingsBinder.

Usage:
    class AppSettings(ObservableSettings):
        text_box: str = "Hello"
        check_box: bool = False

    settings = AppSettings()
    settings.property_changed.connect(lambda name: print(name))
    settings.check_box = True   # prints "check_box"
"""
from typing import Any, List

from pydantic import BaseModel, ConfigDict, PrivateAttr

from settingsbinder.core.accessors import PropertyRef
from settingsbinder.core.signals import Signal


class ObservableSettings(BaseModel):
    """
    Base class for settings objects with per-property change notification.

    Assignments are validated by pydantic. property_changed is emitted with
    the field name after the new value is stored, and only when the stored
    value differs from the previous one. Subscriber errors are re-raised to
    the code that made the assignment.
    """
    model_config = ConfigDict(validate_assignment=True)

    _property_changed: Signal = PrivateAttr(
        default_factory=lambda: Signal("PropertyChanged", propagate_errors=True)
    )

    @property
    def property_changed(self) -> Signal:
        return self._property_changed

    def __setattr__(self, name: str, value: Any) -> None:
        if name not in type(self).model_fields:
            super().__setattr__(name, value)
            return

        old_value = getattr(self, name)
        super().__setattr__(name, value)
        if getattr(self, name) != old_value:
            self._property_changed.emit(name)

    # --- By-name access ---

    @classmethod
    def property_names(cls) -> List[str]:
        return list(cls.model_fields)

    @classmethod
    def ref(cls, name: str) -> PropertyRef:
        """Name constant for a declared property."""
        if name not in cls.model_fields:
            raise KeyError(f"{cls.__name__} has no property '{name}'")
        return PropertyRef(cls, name)

    def get_value(self, name: str) -> Any:
        if name not in type(self).model_fields:
            raise KeyError(f"{type(self).__name__} has no property '{name}'")
        return getattr(self, name)

    def set_value(self, name: str, value: Any) -> None:
        if name not in type(self).model_fields:
            raise KeyError(f"{type(self).__name__} has no property '{name}'")
        setattr(self, name, value)

    def reset(self) -> None:
        """Restore every property to its declared default."""
        for name, field in type(self).model_fields.items():
            setattr(self, name, field.get_default(call_default_factory=True))
