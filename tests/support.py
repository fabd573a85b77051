"""Shared test doubles."""
import enum
from typing import Any, List

from settingsbinder import ObservableSettings, ReentrantWriteDetected, Signal


class Theme(enum.Enum):
    LIGHT = "light"
    DARK = "dark"


class SampleSettings(ObservableSettings):
    text_box: str = "Hello"
    check_box: bool = False
    count: int = 0
    ratio: float = 0.5
    theme: Theme = Theme.LIGHT


class FakeObserver:
    """
    Observer with a value and a change notification.

    Like a Qt widget, programmatic writes also fire `changed`. A write that
    arrives while a listener is still connected means the binder failed to
    suppress the echo, so the setter raises ReentrantWriteDetected.
    """

    def __init__(self, value: Any = None):
        self.value = value
        self.changed = Signal("ValueChanged", propagate_errors=True)
        self.writes: List[Any] = []

    def get(self):
        return self.value

    def set(self, value):
        if len(self.changed):
            raise ReentrantWriteDetected(f"write of {value!r} with listener attached")
        self.writes.append(value)
        self.value = value
        self.changed.emit(value)

    def user_edit(self, value):
        """Simulate an edit made by the user."""
        self.value = value
        self.changed.emit(value)

    def accessors(self):
        return self.get, self.set, self.changed.connect, self.changed.disconnect
