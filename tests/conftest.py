import pytest

from slot_machine.core.reels import ReelBank


class ScriptedRNG:
    """Returns the given reel-stop indices in order, cycling."""

    def __init__(self, *indices):
        self.indices = list(indices)
        self.calls = []

    def random_int(self, min_val, max_val):
        index = self.indices[len(self.calls) % len(self.indices)]
        self.calls.append((min_val, max_val))
        return index


# Stop indices into the default 50-stop reel
CHERRY_STOP = 0
LEMON_STOP = 15
ORANGE_STOP = 27
BELL_STOP = 37
BAR_STOP = 45
SEVEN_STOP = 49


@pytest.fixture
def scripted_bank():
    """Factory for a reel bank that lands on the given stops."""

    def factory(*indices):
        return ReelBank(rng=ScriptedRNG(*indices))

    return factory
