"""
Unit tests for Genome and the chromosome addressing helpers.

Tests cover:
- Derived head/tail/gene lengths
- Alphabet indexing and symbol classification
- Construction failures
- Gene, head and tail spans
"""

import pytest

from gep_evolution.chromosome import (
    ChromosomeError, gene_count, gene_span, head_span, position,
    rebuild, replace_gene, tail_span,
)
from gep_evolution.chromosome import genes as split_genes
from gep_evolution.genome import Genome, GenomeError


# ============================================================================
# Genome Tests
# ============================================================================

class TestGenome:
    """Test the genome grammar and shape."""

    def test_shape_of_reference_genome(self):
        """Head 15 with binary functions gives tail 16 and gene 31."""
        g = Genome(terminals=['a'], functions=['+', '-', '*'], max_arity=2, head_length=15)
        assert g.tail_length == 16
        assert g.gene_length == 31

    @pytest.mark.parametrize("max_arity", [1, 2, 3, 4])
    @pytest.mark.parametrize("head_length", [1, 2, 5, 10])
    def test_tail_length_law(self, max_arity, head_length):
        g = Genome(['x'], ['f'], max_arity=max_arity, head_length=head_length)
        assert g.tail_length == head_length * (max_arity - 1) + 1
        assert g.gene_length == head_length + g.tail_length

    def test_alphabet_counts(self, genome):
        assert genome.num_terminals == 2
        assert genome.num_functions == 3
        assert genome.size == 5
        assert genome.max_arity == 2

    def test_indexing(self, genome):
        assert genome.terminal(1) == 'b'
        assert genome.function(2) == '*'
        # Functions come first in the full alphabet
        assert genome.symbol(0) == '+'
        assert genome.symbol(3) == 'a'
        assert genome.symbol(4) == 'b'
        with pytest.raises(IndexError):
            genome.symbol(5)

    def test_symbol_classification(self, genome):
        assert genome.is_function('+')
        assert not genome.is_function('a')
        assert genome.is_terminal('b')
        assert not genome.is_terminal('*')
        assert not genome.is_function('z')
        assert not genome.is_terminal('z')

    def test_random_symbols(self, genome, rng):
        for _ in range(100):
            assert genome.random_terminal(rng) in ('a', 'b')
            assert genome.random_symbol(rng) in ('a', 'b', '+', '-', '*')

    def test_read_only(self, genome):
        with pytest.raises(AttributeError):
            genome.head_length = 10
        with pytest.raises(AttributeError):
            genome.tail_length = 10
        with pytest.raises(AttributeError):
            genome._head_length = 2
        with pytest.raises(AttributeError):
            genome.extra = 1
        with pytest.raises(AttributeError):
            del genome._terminals
        assert genome.head_length == 4

    def test_single_char_symbols(self, genome):
        assert genome.single_char_symbols
        assert not Genome(['a'], ['sin', '+'], 2, 3).single_char_symbols
        assert not Genome([1, 2], ['+'], 2, 3).single_char_symbols

    def test_chromosome_length(self, genome):
        assert genome.chromosome_length(3) == 27

    def test_is_valid(self, genome, genes):
        assert genome.is_valid(genes['A'])
        assert genome.is_valid(genes['A'] + genes['D'])
        # Function symbol in the tail
        assert not genome.is_valid("+*abaa+ab")
        # Unknown symbol in the head
        assert not genome.is_valid("+*zbaabab")
        assert not genome.is_valid(genes['A'][:-1])
        assert not genome.is_valid("")

    def test_equality(self):
        g1 = Genome(['a'], ['+'], 2, 3)
        g2 = Genome(('a',), ('+',), 2, 3)
        assert g1 == g2
        assert hash(g1) == hash(g2)
        assert g1 != Genome(['a'], ['+'], 2, 4)

    def test_no_functions_allowed(self):
        g = Genome(['a', 'b'], [], max_arity=1, head_length=3)
        assert g.num_functions == 0
        assert g.tail_length == 1

    @pytest.mark.parametrize("kwargs", [
        dict(terminals=[], functions=['+'], max_arity=2, head_length=3),
        dict(terminals=['a'], functions=['+'], max_arity=0, head_length=3),
        dict(terminals=['a'], functions=['+'], max_arity=2, head_length=0),
        dict(terminals=['a', '+'], functions=['+'], max_arity=2, head_length=3),
    ])
    def test_construction_failures(self, kwargs):
        with pytest.raises(GenomeError):
            Genome(**kwargs)


# ============================================================================
# Addressing Tests
# ============================================================================

class TestAddressing:
    """Test gene/head/tail addressing of flat chromosomes."""

    def test_gene_count(self, genome, genes):
        assert gene_count(genome, genes['A']) == 1
        assert gene_count(genome, genes['A'] + genes['B']) == 2

    @pytest.mark.parametrize("length", [0, 8, 10])
    def test_gene_count_rejects_bad_length(self, genome, length):
        with pytest.raises(ChromosomeError):
            gene_count(genome, "a" * length)

    def test_spans(self, genome):
        assert gene_span(genome, 0) == slice(0, 9)
        assert gene_span(genome, 1) == slice(9, 18)
        assert head_span(genome, 1) == slice(9, 13)
        assert tail_span(genome, 1) == slice(13, 18)

    def test_spans_address_chromosome(self, genome, genes):
        c = genes['A'] + genes['B']
        assert c[gene_span(genome, 1)] == genes['B']
        assert c[head_span(genome, 0)] == "+*ab"
        assert c[tail_span(genome, 0)] == "aabab"

    def test_position(self, genome):
        assert position(genome, 0, 0) == 0
        assert position(genome, 1, 3) == 12
        with pytest.raises(IndexError):
            position(genome, 1, 9)

    def test_genes(self, genome, genes):
        assert split_genes(genome, genes['A'] + genes['B'] + genes['C']) == [
            genes['A'], genes['B'], genes['C']]

    def test_rebuild_keeps_container_type(self):
        assert rebuild("abc", ['x', 'y']) == "xy"
        assert rebuild(('a',), ['x', 'y']) == ('x', 'y')
        assert rebuild(['a'], ('x', 'y')) == ['x', 'y']

    def test_rebuild_str_with_wide_symbol_becomes_tuple(self):
        assert rebuild("a+a", ['sin', 'a', 'a']) == ('sin', 'a', 'a')

    def test_replace_first_and_last_gene(self, genome, genes):
        c = genes['A'] + genes['B'] + genes['C']
        assert replace_gene(genome, c, 0, genes['D']) == genes['D'] + genes['B'] + genes['C']
        assert replace_gene(genome, c, 2, genes['D']) == genes['A'] + genes['B'] + genes['D']
        # Input untouched
        assert c == genes['A'] + genes['B'] + genes['C']

    def test_replace_single_gene(self, genome, genes):
        assert replace_gene(genome, genes['A'], 0, genes['B']) == genes['B']

    def test_replace_gene_errors(self, genome, genes):
        with pytest.raises(ChromosomeError):
            replace_gene(genome, genes['A'], 0, "abc")
        with pytest.raises(IndexError):
            replace_gene(genome, genes['A'], 1, genes['B'])

    def test_tuple_chromosomes(self, genome, genes):
        c = tuple(genes['A'] + genes['B'])
        result = replace_gene(genome, c, 1, tuple(genes['C']))
        assert isinstance(result, tuple)
        assert result == tuple(genes['A'] + genes['C'])
