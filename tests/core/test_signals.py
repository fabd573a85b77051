import pytest
from unittest.mock import MagicMock
from settingsbinder.core.signals import Signal

def test_signal_event():
    """Verify Signal behavior."""
    sig = Signal("test_signal")
    mock_handler = MagicMock()

    sig.connect(mock_handler)
    sig.emit("data", 123)

    mock_handler.assert_called_once_with("data", 123)

    sig.disconnect(mock_handler)
    sig.emit("data2")
    assert mock_handler.call_count == 1

def test_connect_once():
    sig = Signal()
    results = []
    sig.connect(results.append)
    sig.connect(results.append)
    sig.emit(1)
    assert results == [1]
    assert len(sig) == 1
    assert sig.is_connected(results.append)

def test_disconnect_unknown_is_noop():
    sig = Signal()
    sig.disconnect(print)
    assert len(sig) == 0

def test_error_safety(loguru_messages):
    """Ensure error in one subscriber doesnt block others"""
    sig = Signal("err_evt")
    results = []

    def buggy_callback():
        raise ValueError("Bug")

    def worker_callback():
        results.append("ok")

    sig.connect(buggy_callback)
    sig.connect(worker_callback)

    sig.emit()

    assert results == ["ok"]
    assert any("Bug" in m for m in loguru_messages)

def test_propagate_single_error():
    sig = Signal("strict", propagate_errors=True)
    results = []
    sig.connect(MagicMock(side_effect=ValueError("first")))
    sig.connect(lambda: results.append("ran"))

    with pytest.raises(ValueError, match="first"):
        sig.emit()
    assert results == ["ran"]

def test_propagate_several_errors():
    sig = Signal("strict", propagate_errors=True)
    sig.connect(MagicMock(side_effect=ValueError("a")))
    sig.connect(MagicMock(side_effect=KeyError("b")))

    with pytest.raises(ExceptionGroup) as excinfo:
        sig.emit()
    assert len(excinfo.value.exceptions) == 2

def test_disconnect_during_emit():
    sig = Signal()
    calls = []

    def first():
        calls.append("first")
        sig.disconnect(second)

    def second():
        calls.append("second")

    sig.connect(first)
    sig.connect(second)
    sig.emit()
    sig.emit()

    assert calls == ["first", "second", "first"]
