"""
gep_evolution/chromosome.py - Gene, head and tail addressing for chromosomes

Chromosomes are flat symbol sequences: a ``str`` when every symbol is a
single character, otherwise a tuple or list. Operators address them through
(gene, offset) pairs using the helpers below, so the first/last gene and
mono-genic cases are handled in one place.
"""
from typing import Hashable, Iterable, List, Sequence

from .genome import Genome


class ChromosomeError(ValueError):
    """Raised when a chromosome does not fit the genome's gene shape"""


def gene_count(genome: Genome, chromosome: Sequence[Hashable]) -> int:
    """Number of genes in a chromosome"""
    length = len(chromosome)
    if length == 0 or length % genome.gene_length != 0:
        raise ChromosomeError(
            f"Chromosome length {length} is not a positive multiple of "
            f"gene length {genome.gene_length}")
    return length // genome.gene_length


def gene_span(genome: Genome, index: int) -> slice:
    start = index * genome.gene_length
    return slice(start, start + genome.gene_length)


def head_span(genome: Genome, index: int) -> slice:
    start = index * genome.gene_length
    return slice(start, start + genome.head_length)


def tail_span(genome: Genome, index: int) -> slice:
    start = index * genome.gene_length + genome.head_length
    return slice(start, start + genome.tail_length)


def position(genome: Genome, index: int, offset: int) -> int:
    """Absolute position of ``offset`` within gene ``index``"""
    if not 0 <= offset < genome.gene_length:
        raise IndexError(f"Offset {offset} outside gene of length {genome.gene_length}")
    return index * genome.gene_length + offset


def genes(genome: Genome, chromosome: Sequence[Hashable]) -> List[Sequence[Hashable]]:
    """Split a chromosome into its genes"""
    return [chromosome[gene_span(genome, i)] for i in range(gene_count(genome, chromosome))]


def rebuild(template: Sequence[Hashable], symbols: Iterable[Hashable]) -> Sequence[Hashable]:
    """Return ``symbols`` in the same container type as ``template``.

    A ``str`` template only stays a ``str`` while every symbol is a single
    character; otherwise the result is a tuple so its length is kept.
    """
    if isinstance(template, str):
        symbols = list(symbols)
        if all(isinstance(s, str) and len(s) == 1 for s in symbols):
            return ''.join(symbols)
        return tuple(symbols)
    if isinstance(template, tuple):
        return tuple(symbols)
    return list(symbols)


def replace_gene(genome: Genome, chromosome: Sequence[Hashable], index: int,
                 gene: Sequence[Hashable]) -> Sequence[Hashable]:
    """Return a copy of ``chromosome`` with gene slot ``index`` replaced"""
    if len(gene) != genome.gene_length:
        raise ChromosomeError(f"Gene length {len(gene)} != {genome.gene_length}")
    count = gene_count(genome, chromosome)
    if not 0 <= index < count:
        raise IndexError(f"Gene index {index} outside chromosome of {count} genes")

    symbols = list(chromosome)
    symbols[gene_span(genome, index)] = list(gene)
    return rebuild(chromosome, symbols)
