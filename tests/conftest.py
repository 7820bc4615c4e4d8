import random

import pytest


@pytest.fixture
def rng () -> random.Random:

	"""Seeded random source so generated progressions are repeatable."""

	return random.Random(42)
