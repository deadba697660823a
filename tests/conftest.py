import math

import pytest


class ScriptedRandom:
    """Stands in for SeededRandom, handing out a fixed list of numbers"""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def next(self):
        self.calls += 1
        return self.values.pop(0)

    def next_int(self, minimum, maximum):
        return math.floor(self.next() * (maximum - minimum) + minimum)


@pytest.fixture
def scripted_random():
    return ScriptedRandom
