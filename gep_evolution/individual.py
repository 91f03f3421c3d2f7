"""
gep_evolution/individual.py - A single chromosome and how to express it
"""
from typing import Hashable, List, Optional, Sequence, Union

from .expression import Decoder, ExpressionNode, get_domain
from .genome import Genome


class IndividualError(ValueError):
    """Raised when an individual is built or used with invalid arguments"""


class Individual:
    """One member of a population.

    Holds exactly one chromosome of ``gene_count`` genes. Operators never
    edit the chromosome in place; they produce a new value that replaces it
    through the ``chromosome`` property.
    """

    def __init__(self, genome: Genome, gene_count: int,
                 chromosome: Optional[Sequence[Hashable]] = None,
                 decoder: Union[Decoder, str, None] = None):
        if genome is None:
            raise IndividualError("Cannot create individual with null genome")
        if not isinstance(gene_count, int) or gene_count <= 0:
            raise IndividualError(f"Bogus gene count: {gene_count!r}")

        self.genome = genome
        self.gene_count = gene_count
        self.decoder = get_domain(decoder) if isinstance(decoder, str) else decoder
        self.fitness = 0.0
        self._chromosome = None

        if chromosome is not None:
            self.chromosome = chromosome

    @property
    def chromosome(self) -> Optional[Sequence[Hashable]]:
        return self._chromosome

    @chromosome.setter
    def chromosome(self, chromosome: Sequence[Hashable]) -> None:
        if chromosome is None:
            raise IndividualError("Chromosome cannot be None")
        if len(chromosome) % self.genome.gene_length != 0:
            raise IndividualError(
                f"Chromosome wrong length: {len(chromosome)} is not a multiple "
                f"of gene length {self.genome.gene_length}")
        expected = self.genome.chromosome_length(self.gene_count)
        if len(chromosome) != expected:
            raise IndividualError(
                f"Chromosome has {len(chromosome) // self.genome.gene_length} genes, "
                f"expected {self.gene_count}")
        self._chromosome = chromosome

    def random_chromosome(self, rng) -> Sequence[Hashable]:
        """Seed this individual with a random valid chromosome"""
        symbols = []
        for _ in range(self.gene_count):
            for _ in range(self.genome.head_length):
                # Flip for function or terminal
                if self.genome.num_functions and rng.randrange(2) == 0:
                    symbols.append(self.genome.function(rng.randrange(self.genome.num_functions)))
                else:
                    symbols.append(self.genome.random_terminal(rng))
            for _ in range(self.genome.tail_length):
                symbols.append(self.genome.random_terminal(rng))

        if self.genome.single_char_symbols:
            self._chromosome = ''.join(symbols)
        else:
            self._chromosome = tuple(symbols)
        return self._chromosome

    def express(self) -> List[ExpressionNode]:
        """Decode the chromosome into one expression tree per gene"""
        if self.decoder is None:
            raise IndividualError("Individual has no decoder to express with")
        if self._chromosome is None:
            raise IndividualError("Individual has no chromosome to express")
        return self.decoder(self._chromosome, self.genome)

    def replicate(self) -> 'Individual':
        """Create an independent copy of this individual"""
        clone = Individual(self.genome, self.gene_count, decoder=self.decoder)
        chromosome = self._chromosome
        clone._chromosome = list(chromosome) if isinstance(chromosome, list) else chromosome
        clone.fitness = self.fitness
        return clone

    def __str__(self) -> str:
        chromosome = self._chromosome
        if chromosome is not None and not isinstance(chromosome, str):
            chromosome = ' '.join(map(str, chromosome))
        return f"Individual(fitness={self.fitness:.4f}, chromosome={chromosome})"
