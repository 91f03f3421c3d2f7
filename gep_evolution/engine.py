"""
gep_evolution/engine.py - Generational driver: express, score, select, operate
"""
import random
from dataclasses import dataclass, field
from typing import List, Optional

from loguru import logger

from .expression import Decoder
from .fitness import Fitness, fitness_weights
from .genome import Genome
from .individual import Individual
from .operators import GeneticOperators
from .population import Population
from .sampling import create_sampler


@dataclass
class EvolutionConfig:
    """Settings for one evolutionary run"""
    population_size: int = 75
    gene_count: int = 1
    head_length: int = 8
    p_mutate: float = 0.4
    p_one_point: float = 0.3
    p_two_point: float = 0.15
    p_gene_recombination: float = 0.1
    p_gene_transposition: float = 0.1
    p_is_transposition: float = 0.05
    p_ris_transposition: float = 0.03
    mutations: int = 1
    sampler: str = 'roulette'
    epsilon: float = 1e-6
    tournament_size: int = 3
    seed: Optional[int] = None
    max_generations: int = 100
    target_fitness: Optional[float] = None

    def __post_init__(self):
        if self.population_size < 3:
            raise ValueError("population_size must be at least 3")
        if self.gene_count < 1:
            raise ValueError("gene_count must be at least 1")
        if self.max_generations < 1:
            raise ValueError("max_generations must be at least 1")


@dataclass
class RunResult:
    best: Individual
    best_fitness: float
    generations: int
    converged: bool
    history: List[float] = field(default_factory=list)


class Evolver:
    """Runs the GEP generation loop for one genome and fitness harness"""

    def __init__(self, config: EvolutionConfig, genome: Genome, decoder: Decoder,
                 fitness: Fitness):
        self.config = config
        self.genome = genome
        self.decoder = decoder
        self.fitness = fitness
        self.rng = random.Random(config.seed)

        if config.sampler == 'roulette':
            sampler = create_sampler('roulette', self.rng, epsilon=config.epsilon)
        elif config.sampler == 'tournament':
            sampler = create_sampler('tournament', self.rng,
                                     tournament_size=config.tournament_size)
        else:
            sampler = create_sampler(config.sampler, self.rng)

        self.operators = GeneticOperators(genome, self.rng)
        self.operators.p_mutate = config.p_mutate
        self.operators.p_one_point = config.p_one_point
        self.operators.p_two_point = config.p_two_point
        self.operators.p_gene_recombination = config.p_gene_recombination
        self.operators.p_gene_transposition = config.p_gene_transposition
        self.operators.p_is_transposition = config.p_is_transposition
        self.operators.p_ris_transposition = config.p_ris_transposition

        self.population = Population(genome, sampler, config.population_size)
        self._seed_population()

    def _seed_population(self) -> None:
        while not self.population.is_full:
            individual = Individual(self.genome, self.config.gene_count, decoder=self.decoder)
            individual.random_chromosome(self.rng)
            self.population.add(individual)

    def _score(self) -> List[float]:
        scores = []
        for individual in self.population:
            individual.fitness = self.fitness.evaluate(individual)
            scores.append(individual.fitness)
        return scores

    def _recombine(self, individual: Individual, partner: Individual) -> None:
        ops = self.operators
        pair = (individual.chromosome, partner.chromosome)

        # Pick the kind in proportion to the three recombination probabilities
        draw = self.rng.random() * ops.crossover_rate
        if draw < ops.p_one_point:
            pair = ops.one_point_recombination(pair)
        elif draw < ops.p_one_point + ops.p_two_point:
            pair = ops.two_point_recombination(pair)
        else:
            pair = ops.gene_recombination(pair)

        individual.chromosome, partner.chromosome = pair

    def _apply_operators(self) -> None:
        ops = self.operators
        members = self.population.individuals
        n = len(members)

        # Slot 0 holds the elite and is left alone
        for i in range(1, n):
            individual = members[i]

            if self.rng.random() < ops.p_mutate:
                individual.chromosome = ops.mutate(individual.chromosome, self.config.mutations)
            if self.rng.random() < ops.p_is_transposition:
                individual.chromosome = ops.is_transpose(individual.chromosome)
            if self.rng.random() < ops.p_ris_transposition:
                individual.chromosome = ops.ris_transpose(individual.chromosome)
            if self.rng.random() < ops.p_gene_transposition:
                individual.chromosome = ops.gene_transpose(individual.chromosome)

            if ops.crossover_rate > 0 and self.rng.random() < ops.crossover_rate:
                other = self.rng.randrange(n)
                while other == i or other == 0:
                    other = self.rng.randrange(n)
                self._recombine(individual, members[other])

    def step(self) -> Individual:
        """Run one generation and return a copy of its best individual"""
        scores = self._score()
        best_index = max(range(len(scores)), key=lambda i: scores[i])
        best = self.population[best_index].replicate()

        self.population.select(fitness_weights(scores), best_index)
        self._apply_operators()
        return best

    def run(self) -> RunResult:
        """Evolve until the target fitness or the generation limit is reached"""
        target = self.config.target_fitness
        history = []
        best = None
        converged = False

        for gen in range(self.config.max_generations):
            champion = self.step()
            history.append(champion.fitness)
            if best is None or champion.fitness > best.fitness:
                best = champion

            logger.info(f"Gen {gen:3d}: best={champion.fitness:.4f}")

            if target is not None and champion.fitness >= target:
                converged = True
                break

        return RunResult(best=best, best_fitness=best.fitness, generations=len(history),
                         converged=converged, history=history)
