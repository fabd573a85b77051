from loguru import logger
from typing import Callable, List


class Signal:
    """
    A simple observer pattern implementation (Synchronous).
    Allows subscribers to connect to this signal and receive notifications.
    Equivalent to Qt's Signal or C#'s event.

    Every subscriber is called even if an earlier one raises. Errors are
    logged; with propagate_errors=True they are re-raised to the emitter
    once all subscribers have run.
    """
    def __init__(self, name: str = "Signal", propagate_errors: bool = False):
        self.name = name
        self.propagate_errors = propagate_errors
        self._subscribers: List[Callable] = []

    def connect(self, callback: Callable):
        """Connect a callback function to this signal."""
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def disconnect(self, callback: Callable):
        """Disconnect a callback function from this signal."""
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def is_connected(self, callback: Callable) -> bool:
        return callback in self._subscribers

    def emit(self, *args, **kwargs):
        """Broadcast arguments to all subscribers synchronously."""
        errors: List[Exception] = []
        for sub in list(self._subscribers):
            try:
                sub(*args, **kwargs)
            except Exception as e:
                logger.error(f"Signal '{self.name}' error in subscriber '{sub}': {e}")
                errors.append(e)

        if errors and self.propagate_errors:
            if len(errors) == 1:
                raise errors[0]
            raise ExceptionGroup(f"Signal '{self.name}' subscribers failed", errors)

    def __len__(self) -> int:
        return len(self._subscribers)
