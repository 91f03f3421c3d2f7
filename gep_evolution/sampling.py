"""
gep_evolution/sampling.py - Fitness-proportional index sampling for selection
"""
import math
from abc import ABC, abstractmethod
from typing import List, Sequence

import numpy as np
from loguru import logger


class Sampler(ABC):
    """Turns a list of weights into a list of sampled indices (with replacement)"""

    @abstractmethod
    def sample(self, weights: Sequence[float]) -> List[int]:
        """Return ``len(weights)`` indices into ``weights``"""
        pass


class RouletteWheelSampler(Sampler):
    """Roulette wheel (inverse CDF) sampling.

    Weights should sum to 1.0. A sum further than ``epsilon`` from 1.0 is
    logged as a warning and sampling goes ahead anyway.
    """

    def __init__(self, rng, epsilon: float = 1e-6):
        self.rng = rng
        self.epsilon = epsilon

    def sample(self, weights: Sequence[float]) -> List[int]:
        n = len(weights)
        if n == 0:
            return []

        cumulative = np.cumsum(np.asarray(weights, dtype=float))
        total = float(cumulative[-1])
        if abs(total - 1.0) > self.epsilon:
            logger.warning(f"Weight sum outside tolerance ({total})")

        selected = []
        for _ in range(n):
            draw = self.rng.random()
            # First index whose cumulative weight is strictly greater than the
            # draw, so a draw landing on a boundary belongs to the next slot
            index = int(np.searchsorted(cumulative, draw, side='right'))
            selected.append(min(index, n - 1))

        return selected


class StochasticUniversalSampler(Sampler):
    """Uniform index sampling.

    Only the number of weights is used; each slot is an independent uniform
    draw. This is not the single-pointer stochastic universal sampling of
    the literature, and callers rely on the uniform behaviour.
    """

    def __init__(self, rng):
        self.rng = rng

    def sample(self, weights: Sequence[float]) -> List[int]:
        n = len(weights)
        return [int(math.floor(self.rng.random() * n)) for _ in range(n)]


class TournamentSampler(Sampler):
    """Tournament selection: each slot is the heaviest of a few random picks"""

    def __init__(self, rng, tournament_size: int = 3):
        if tournament_size < 1:
            raise ValueError(f"tournament_size must be >= 1, got {tournament_size}")
        self.rng = rng
        self.tournament_size = tournament_size

    def sample(self, weights: Sequence[float]) -> List[int]:
        n = len(weights)
        selected = []
        for _ in range(n):
            contenders = [self.rng.randrange(n) for _ in range(self.tournament_size)]
            selected.append(max(contenders, key=lambda i: weights[i]))
        return selected


SAMPLERS = {
    'roulette': RouletteWheelSampler,
    'sus': StochasticUniversalSampler,
    'tournament': TournamentSampler,
}


def create_sampler(name: str, rng, **kwargs) -> Sampler:
    """Build a sampler by name"""
    try:
        sampler_cls = SAMPLERS[name]
    except KeyError:
        raise ValueError(f"Unknown sampler: {name} (choose from {sorted(SAMPLERS)})") from None
    return sampler_cls(rng, **kwargs)
