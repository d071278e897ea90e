import pytest

from backend.engine import CalculatorEngine
from backend.preferences import MemoryPreferences


class RecordingPreferences(MemoryPreferences):
    """Memory store that also remembers every save call."""

    def __init__(self, initial=None):
        super().__init__(initial)
        self.saves = []

    def save(self, key, value):
        self.saves.append((key, value))
        super().save(key, value)


@pytest.fixture
def prefs():
    return RecordingPreferences()


@pytest.fixture
def engine(prefs):
    return CalculatorEngine(prefs)


@pytest.fixture
def press(engine):
    """Press a sequence of tokens and return the final display."""
    def _press(*tokens):
        display = engine.display
        for token in tokens:
            display = engine.handle_input(token)
        return display
    return _press
