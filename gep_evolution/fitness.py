"""
gep_evolution/fitness.py - Test-case fitness harness and selection weights
"""
from typing import Any, Callable, List, Mapping, Optional, Sequence

import numpy as np
from loguru import logger

from .expression import EvaluationError
from .individual import Individual

EXPECTED_KEY = 'expected'
FAILURE_VALUE = -1e9


class Fitness:
    """Scores individuals against a fixed set of test cases.

    Each test case maps terminal names to input values and carries the
    wanted output under the reserved ``'expected'`` key. A case scores
    ``max_fitness - |value - expected|``; the individual's fitness is the
    sum over all cases. When the bindings are numpy arrays the absolute
    errors of all elements are summed. Cases whose evaluation fails score as
    if the expression had produced ``FAILURE_VALUE``.
    """

    def __init__(self, test_cases: Sequence[Mapping[str, Any]], max_fitness: float,
                 linker: Optional[Callable[[List[Any]], Any]] = None):
        for i, case in enumerate(test_cases):
            if EXPECTED_KEY not in case:
                raise ValueError(f"Test case {i} missing '{EXPECTED_KEY}' key")
        self.test_cases = list(test_cases)
        self.max_fitness = max_fitness
        self.linker = linker

    @property
    def ideal(self) -> float:
        """Fitness of an individual that hits every expected value"""
        return self.max_fitness * len(self.test_cases)

    def _error(self, roots, case: Mapping[str, Any]) -> float:
        if self.linker is None:
            value = roots[0].evaluate(case)
        else:
            value = self.linker([root.evaluate(case) for root in roots])
        values = np.asarray(value, dtype=float)
        if not np.all(np.isfinite(values)):
            raise EvaluationError(f"Non-finite value: {value}")
        # Array bindings give one error per element, summed into the case
        return float(np.sum(np.abs(values - np.asarray(case[EXPECTED_KEY], dtype=float))))

    def evaluate(self, individual: Individual) -> float:
        roots = individual.express()
        total = 0.0

        for case in self.test_cases:
            try:
                error = self._error(roots, case)
            except (ArithmeticError, ValueError) as e:
                logger.debug(f"Evaluation failed: {e}")
                expected = np.asarray(case[EXPECTED_KEY], dtype=float)
                error = float(np.sum(np.abs(FAILURE_VALUE - expected)))
            total += self.max_fitness - error

        return total


def fitness_weights(scores: Sequence[float]) -> List[float]:
    """Turn raw scores into selection weights summing to 1.0"""
    if len(scores) == 0:
        return []
    scores = np.asarray(scores, dtype=float)
    # Ensure all weights are positive
    adjusted = scores - np.min(scores) + 0.01
    return (adjusted / np.sum(adjusted)).tolist()
