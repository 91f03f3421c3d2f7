"""
gep_evolution/population.py - Fixed-capacity population with elitist selection
"""
from typing import Any, Dict, Iterator, List, Sequence, Tuple

import numpy as np
from loguru import logger

from .genome import Genome
from .individual import Individual
from .sampling import Sampler


class PopulationFullError(RuntimeError):
    """Raised when adding to a population that is already at capacity"""


class Population:
    """Manages the individuals of one run.

    The population is filled up to ``capacity`` with ``add``. Each
    generation ``select`` swaps in a whole new collection; the old list is
    never edited in place.
    """

    def __init__(self, genome: Genome, sampler: Sampler, capacity: int):
        if capacity < 1:
            raise ValueError(f"Population capacity must be >= 1, got {capacity}")
        self.genome = genome
        self.sampler = sampler
        self.capacity = capacity
        self.generation = 0
        self._individuals: List[Individual] = []

    @property
    def individuals(self) -> Tuple[Individual, ...]:
        return tuple(self._individuals)

    @property
    def is_full(self) -> bool:
        return len(self._individuals) >= self.capacity

    def __len__(self) -> int:
        return len(self._individuals)

    def __iter__(self) -> Iterator[Individual]:
        return iter(self._individuals)

    def __getitem__(self, index: int) -> Individual:
        return self._individuals[index]

    def add(self, individual: Individual) -> None:
        """Append an individual; raises PopulationFullError at capacity"""
        if self.is_full:
            raise PopulationFullError(
                f"Population full ({self.capacity}) - cannot add individual")
        self._individuals.append(individual)

    def select(self, weights: Sequence[float], best_index: int) -> None:
        """Replace the population with a sample, always keeping the best.

        The individual at ``best_index`` goes first; the sampled individuals
        fill the remaining slots and the last sampled index is dropped to
        make room for it.
        """
        if len(weights) != len(self._individuals):
            raise ValueError(
                f"Got {len(weights)} weights for {len(self._individuals)} individuals")
        if not 0 <= best_index < len(self._individuals):
            raise IndexError(f"best_index {best_index} outside population")

        indices = self.sampler.sample(weights)

        new_individuals = [self._individuals[best_index]]
        for index in indices[:-1]:
            new_individuals.append(self._individuals[index].replicate())

        self._individuals = new_individuals
        self.generation += 1
        logger.debug(f"Generation {self.generation}: kept elite {best_index}, "
                     f"sampled {len(indices) - 1}")

    def get_best(self, n: int = 1) -> List[Individual]:
        """Get the best n individuals"""
        return sorted(self._individuals, key=lambda ind: ind.fitness, reverse=True)[:n]

    def get_stats(self) -> Dict[str, Any]:
        """Get population statistics"""
        if not self._individuals:
            return {}

        fitnesses = [ind.fitness for ind in self._individuals]
        return {
            'generation': self.generation,
            'population_size': len(self._individuals),
            'fitness': {
                'min': float(np.min(fitnesses)),
                'max': float(np.max(fitnesses)),
                'mean': float(np.mean(fitnesses)),
                'std': float(np.std(fitnesses))
            },
            'unique_chromosomes': len({tuple(ind.chromosome) for ind in self._individuals
                                       if ind.chromosome is not None})
        }
