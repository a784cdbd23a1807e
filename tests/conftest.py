import pytest

from connectfour.debug import debug, DebugLevel
from connectfour.game import Contestant, Engine
from connectfour.utils import GameMode

# 42 legal drops, Red first, that fill the grid without four in a row:
#   . rows alternate "RRBBRRB" / "BBRRBBR", so no line holds more than two
#   . column 6 is kept for last because the final drop is Blue's
DRAW_SEQUENCE = [2, 0, 0, 2, 2, 0, 0, 2, 2, 0, 0, 2,
                 3, 1, 1, 3, 3, 1, 1, 3, 3, 1, 1, 3,
                 6, 4, 4, 6, 6, 5, 5, 4, 4, 5, 5, 4, 4, 5, 5, 6, 6, 6]


class ScriptedRng:
    """Stands in for numpy's Generator and hands out preset columns."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def integers(self, low, high=None):
        self.calls += 1
        return self.values.pop(0)


@pytest.fixture(autouse=True)
def quiet_debug():
    previous = debug.level
    debug.configure(level=DebugLevel.ERROR, components=[])
    yield
    debug.configure(level=previous, components=[])


@pytest.fixture
def alice():
    return Contestant("Alice")


@pytest.fixture
def bob():
    return Contestant("Bob")


@pytest.fixture
def engine(alice, bob):
    return Engine(GameMode.HUMAN_VS_HUMAN, alice, bob, seed=1234)


@pytest.fixture
def play():
    """Drop a sequence of columns, failing the test on any rejection."""
    def _play(engine, columns):
        result = None
        for column in columns:
            result = engine.drop_piece(column)
            assert result.ok, f"move {column} rejected: {result.error}"
        return result
    return _play


@pytest.fixture
def draw_sequence():
    return list(DRAW_SEQUENCE)


@pytest.fixture
def scripted_rng():
    return ScriptedRng
