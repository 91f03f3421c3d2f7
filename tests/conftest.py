"""
Pytest configuration and shared fixtures for gep_evolution tests.

Provides:
- Seeded and scripted random number sources
- Genomes and sample chromosomes
- A loguru capture sink
"""

import random
from collections import deque

import pytest
from loguru import logger

from gep_evolution.genome import Genome


class ScriptedRandom:
    """Stands in for random.Random, returning pre-planned draws in order."""

    def __init__(self, ints=(), floats=()):
        self.ints = deque(ints)
        self.floats = deque(floats)

    def randrange(self, n):
        if not self.ints:
            raise AssertionError("Unexpected randrange draw")
        value = self.ints.popleft()
        assert 0 <= value < n, f"scripted draw {value} outside [0, {n})"
        return value

    def random(self):
        if not self.floats:
            raise AssertionError("Unexpected random draw")
        return self.floats.popleft()

    @property
    def exhausted(self):
        return not self.ints and not self.floats


# ============================================================================
# Randomness Fixtures
# ============================================================================

@pytest.fixture
def rng():
    """Seeded PRNG so randomized tests are repeatable."""
    return random.Random(1234)


@pytest.fixture
def scripted():
    """Factory for scripted random sources."""
    return ScriptedRandom


# ============================================================================
# Genome Fixtures
# ============================================================================

@pytest.fixture
def genome():
    """Two terminals, three binary functions, head 4 -> tail 5, gene 9."""
    return Genome(terminals=['a', 'b'], functions=['+', '-', '*'], max_arity=2, head_length=4)


@pytest.fixture
def arith_genome():
    """Single-variable arithmetic genome, head 3 -> tail 4, gene 7."""
    return Genome(terminals=['a'], functions=['+', '-', '*', '/'], max_arity=2, head_length=3)


@pytest.fixture
def genes():
    """Four valid genes for the ``genome`` fixture."""
    return {
        'A': "+*abaabab",
        'B': "-a*bbbbaa",
        'C': "*ab-abbab",
        'D': "b+a*aaaab",
    }


# ============================================================================
# Logging Fixtures
# ============================================================================

@pytest.fixture
def log_messages():
    """Collect loguru messages at WARNING and above."""
    messages = []
    handler_id = logger.add(messages.append, level="WARNING", format="{level}: {message}")
    yield messages
    logger.remove(handler_id)
