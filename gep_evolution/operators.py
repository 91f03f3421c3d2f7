"""
gep_evolution/operators.py - Mutation, transposition and recombination
"""
from typing import Hashable, Sequence, Tuple

from loguru import logger

from .chromosome import (ChromosomeError, gene_count, gene_span, head_span,
                         position, rebuild, replace_gene)
from .genome import Genome

Chromosome = Sequence[Hashable]
Pair = Tuple[Chromosome, Chromosome]


def _clamp_probability(p: float) -> float:
    # Out-of-range (and NaN) probabilities fall back to 1.0
    if not 0.0 <= p <= 1.0:
        return 1.0
    return float(p)


class GeneticOperators:
    """The GEP operator suite for one genome.

    Operators take chromosome values and return new ones; inputs are never
    modified. Each keeps the chromosome length and never writes a function
    symbol into a tail. The operator probabilities are held here so callers
    can decide whether an operator fires; the operators themselves always
    apply when called.

    All randomness comes from ``rng`` (a ``random.Random`` or anything with
    ``random()`` and ``randrange(n)``), drawn in a fixed order per operator.
    """

    def __init__(self, genome: Genome, rng):
        self.genome = genome
        self.rng = rng

        self._p_mutate = 0.0
        self._p_one_point = 0.0
        self._p_two_point = 0.0
        self._p_gene_recombination = 0.0
        self._p_gene_transposition = 0.0
        self._p_is_transposition = 0.0
        self._p_ris_transposition = 0.0

    # Probabilities

    @property
    def p_mutate(self) -> float:
        return self._p_mutate

    @p_mutate.setter
    def p_mutate(self, p: float) -> None:
        self._p_mutate = _clamp_probability(p)

    @property
    def p_one_point(self) -> float:
        return self._p_one_point

    @p_one_point.setter
    def p_one_point(self, p: float) -> None:
        self._p_one_point = _clamp_probability(p)

    @property
    def p_two_point(self) -> float:
        return self._p_two_point

    @p_two_point.setter
    def p_two_point(self, p: float) -> None:
        self._p_two_point = _clamp_probability(p)

    @property
    def p_gene_recombination(self) -> float:
        return self._p_gene_recombination

    @p_gene_recombination.setter
    def p_gene_recombination(self, p: float) -> None:
        self._p_gene_recombination = _clamp_probability(p)

    @property
    def p_gene_transposition(self) -> float:
        return self._p_gene_transposition

    @p_gene_transposition.setter
    def p_gene_transposition(self, p: float) -> None:
        self._p_gene_transposition = _clamp_probability(p)

    @property
    def p_is_transposition(self) -> float:
        return self._p_is_transposition

    @p_is_transposition.setter
    def p_is_transposition(self, p: float) -> None:
        self._p_is_transposition = _clamp_probability(p)

    @property
    def p_ris_transposition(self) -> float:
        return self._p_ris_transposition

    @p_ris_transposition.setter
    def p_ris_transposition(self, p: float) -> None:
        self._p_ris_transposition = _clamp_probability(p)

    @property
    def crossover_rate(self) -> float:
        """Probability that any of the three recombinations fires"""
        return self._p_one_point + self._p_two_point + self._p_gene_recombination

    # Mutation

    def mutate(self, chromosome: Chromosome, n: int = 1) -> Chromosome:
        """Overwrite ``n`` random head positions with random symbols"""
        num_genes = gene_count(self.genome, chromosome)
        symbols = list(chromosome)

        for _ in range(n):
            gene = self.rng.randrange(num_genes)
            offset = self.rng.randrange(self.genome.head_length)
            symbol = self.genome.random_symbol(self.rng)
            symbols[position(self.genome, gene, offset)] = symbol
            logger.debug(f"mutate: gene {gene} offset {offset} -> {symbol!r}")

        return rebuild(chromosome, symbols)

    # Transposition

    def is_transpose(self, chromosome: Chromosome) -> Chromosome:
        """Insertion sequence transposition.

        A random run of 1..h-1 symbols is copied from anywhere in the
        chromosome into the head of a random gene, at an offset other than
        the root. The head shifts right to make room and the symbols pushed
        past the end of the head are dropped, so the tail stays intact.
        """
        h = self.genome.head_length
        if h < 2:
            return rebuild(chromosome, chromosome)

        num_genes = gene_count(self.genome, chromosome)
        length = len(chromosome)

        is_length = self.rng.randrange(h - 1) + 1
        is_start = self.rng.randrange(length - is_length)
        sequence = list(chromosome[is_start:is_start + is_length])

        target = self.rng.randrange(num_genes)
        offset = self.rng.randrange(h - 1) + 1

        head = list(chromosome[head_span(self.genome, target)])
        new_head = (head[:offset] + sequence + head[offset:])[:h]

        symbols = list(chromosome)
        symbols[head_span(self.genome, target)] = new_head
        logger.debug(f"is_transpose: {is_length} symbols from {is_start} "
                     f"-> gene {target} offset {offset}")
        return rebuild(chromosome, symbols)

    def ris_transpose(self, chromosome: Chromosome) -> Chromosome:
        """Root insertion sequence transposition.

        Scans a random gene's head from a random offset for a function
        symbol. The run starting there becomes the new start of the gene,
        followed by the gene's symbols from the run's length onwards. When
        no function is found the chromosome is returned unchanged.
        """
        num_genes = gene_count(self.genome, chromosome)
        h = self.genome.head_length
        gene_length = self.genome.gene_length

        gene_index = self.rng.randrange(num_genes)
        gene = list(chromosome[gene_span(self.genome, gene_index)])

        pos = self.rng.randrange(h)
        while pos < h and not self.genome.is_function(gene[pos]):
            pos += 1

        if pos == h:
            return rebuild(chromosome, chromosome)

        remaining = gene_length - pos
        ris_length = min(self.rng.randrange(remaining + 1) + 1, remaining)
        ris = gene[pos:pos + ris_length]
        new_gene = ris + gene[ris_length:]

        logger.debug(f"ris_transpose: gene {gene_index} root run of {ris_length} from {pos}")
        return replace_gene(self.genome, chromosome, gene_index, new_gene)

    def gene_transpose(self, chromosome: Chromosome) -> Chromosome:
        """Swap two whole genes; a no-op on mono-genic chromosomes"""
        num_genes = gene_count(self.genome, chromosome)
        if num_genes == 1:
            return rebuild(chromosome, chromosome)

        first = self.rng.randrange(num_genes)
        second = self.rng.randrange(num_genes)
        if first == second:
            return rebuild(chromosome, chromosome)

        symbols = list(chromosome)
        a, b = gene_span(self.genome, first), gene_span(self.genome, second)
        symbols[a], symbols[b] = list(chromosome[b]), list(chromosome[a])

        logger.debug(f"gene_transpose: genes {first} <-> {second}")
        return rebuild(chromosome, symbols)

    # Recombination

    def _check_pair(self, pair: Sequence[Chromosome]) -> Pair:
        if len(pair) != 2:
            raise ChromosomeError(f"Recombination needs two chromosomes, got {len(pair)}")
        first, second = pair
        if len(first) != len(second):
            raise ChromosomeError(
                f"Chromosome lengths differ: {len(first)} != {len(second)}")
        return first, second

    def one_point_recombination(self, pair: Sequence[Chromosome]) -> Pair:
        """Exchange everything after one random cut point"""
        first, second = self._check_pair(pair)
        cut = self.rng.randrange(len(first))

        logger.debug(f"one_point_recombination: cut at {cut}")
        return (rebuild(first, list(first[:cut]) + list(second[cut:])),
                rebuild(second, list(second[:cut]) + list(first[cut:])))

    def two_point_recombination(self, pair: Sequence[Chromosome]) -> Pair:
        """Exchange the segment between two random cut points"""
        first, second = self._check_pair(pair)
        cut1 = self.rng.randrange(len(first))
        cut2 = self.rng.randrange(len(first))
        lo, hi = min(cut1, cut2), max(cut1, cut2)

        logger.debug(f"two_point_recombination: cuts at {lo}, {hi}")
        return (rebuild(first, list(first[:lo]) + list(second[lo:hi]) + list(first[hi:])),
                rebuild(second, list(second[:lo]) + list(first[lo:hi]) + list(second[hi:])))

    def gene_recombination(self, pair: Sequence[Chromosome]) -> Pair:
        """Exchange one randomly chosen gene of each chromosome.

        The two gene indices are drawn independently. Mono-genic pairs
        simply swap places.
        """
        first, second = self._check_pair(pair)
        num_genes = gene_count(self.genome, first)

        if num_genes < 2:
            return rebuild(second, second), rebuild(first, first)

        g1 = self.rng.randrange(num_genes)
        g2 = self.rng.randrange(num_genes)
        gene1 = first[gene_span(self.genome, g1)]
        gene2 = second[gene_span(self.genome, g2)]

        logger.debug(f"gene_recombination: gene {g1} <-> gene {g2}")
        return (replace_gene(self.genome, first, g1, gene2),
                replace_gene(self.genome, second, g2, gene1))
