"""
gep_evolution - Gene Expression Programming

Evolves symbolic expressions encoded as fixed-shape linear chromosomes.
Each gene is a head of function and terminal symbols followed by a tail of
terminals, long enough that every head decodes into a complete tree.
"""

__version__ = "0.1.0"
__author__ = "GEP Evolution Project"

from .genome import Genome, GenomeError
from .chromosome import ChromosomeError
from .operators import GeneticOperators
from .sampling import (
    Sampler, RouletteWheelSampler, StochasticUniversalSampler, TournamentSampler,
    create_sampler
)
from .individual import Individual, IndividualError
from .population import Population, PopulationFullError
from .expression import (
    ExpressionNode, EvaluationError, decode_gene,
    register_domain, get_domain, available_domains
)
from .fitness import Fitness, fitness_weights
from .engine import EvolutionConfig, Evolver, RunResult
from . import domains

__all__ = [
    'Genome', 'GenomeError', 'ChromosomeError',
    'GeneticOperators',
    'Sampler', 'RouletteWheelSampler', 'StochasticUniversalSampler', 'TournamentSampler',
    'create_sampler',
    'Individual', 'IndividualError',
    'Population', 'PopulationFullError',
    'ExpressionNode', 'EvaluationError', 'decode_gene',
    'register_domain', 'get_domain', 'available_domains',
    'Fitness', 'fitness_weights',
    'EvolutionConfig', 'Evolver', 'RunResult',
    'domains'
]
