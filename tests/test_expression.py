"""
Unit tests for expression decoding and the arithmetic domain.

Tests cover:
- Breadth-first gene decoding
- Arithmetic evaluation with numbers and numpy arrays
- Evaluation failures
- Domain registry
"""

import numpy as np
import pytest

from gep_evolution.domains import arithmetic
from gep_evolution.expression import (
    EvaluationError, ExpressionNode, available_domains, decode_gene, get_domain,
    register_domain,
)
from gep_evolution.genome import Genome


class Leaf(ExpressionNode):
    def evaluate(self, bindings):
        return self.symbol


# ============================================================================
# Decoding Tests
# ============================================================================

class TestDecodeGene:
    """Test breadth-first decoding of a single gene."""

    def test_reads_level_by_level(self):
        arity = {'F': 2, 'G': 1}.get
        root = decode_gene("FGabcd", lambda s: arity(s, 0), Leaf)
        assert root.symbol == 'F'
        assert [c.symbol for c in root.children] == ['G', 'a']
        assert [c.symbol for c in root.children[0].children] == ['b']
        # 'c' and 'd' are never read
        assert len(root.get_all_nodes()) == 4
        assert root.get_depth() == 3

    def test_terminal_root(self):
        root = decode_gene("aFF", lambda s: 2 if s == 'F' else 0, Leaf)
        assert root.symbol == 'a'
        assert root.children == []
        assert root.arity == 0

    def test_runs_out_of_symbols(self):
        with pytest.raises(EvaluationError):
            decode_gene("Fa", lambda s: 2 if s == 'F' else 0, Leaf)

    def test_empty_gene(self):
        with pytest.raises(EvaluationError):
            decode_gene("", lambda s: 0, Leaf)

    def test_any_valid_head_decodes(self, arith_genome, rng):
        # The tail is always long enough, even for an all-function head
        root = arithmetic.decode("***aaaa", arith_genome)[0]
        assert len(root.get_all_nodes()) == 7


# ============================================================================
# Arithmetic Domain Tests
# ============================================================================

class TestArithmetic:
    """Test the arithmetic expression plug-in."""

    def test_infix_string(self, arith_genome):
        assert arithmetic.express_chromosome("*+aaaaa", arith_genome) == ["((a + a) * a)"]

    def test_evaluate_scalar(self, arith_genome):
        root = arithmetic.decode("*+aaaaa", arith_genome)[0]
        assert root.evaluate({'a': 2.0}) == 8.0

    def test_evaluate_array(self, arith_genome):
        root = arithmetic.decode("*aaaaaa", arith_genome)[0]
        np.testing.assert_allclose(root.evaluate({'a': np.array([1.0, 2.0, 3.0])}),
                                   [1.0, 4.0, 9.0])

    def test_protected_division(self, arith_genome):
        root = arithmetic.decode("/aaaaaa", arith_genome)[0]
        assert root.evaluate({'a': 0.0}) == 0.0
        assert root.evaluate({'a': 5.0}) == 1.0

    def test_two_variables(self):
        g = arithmetic.arithmetic_genome(['x', 'y'], head_length=2, operators=['-'])
        root = arithmetic.decode("-xyyy", g)[0]
        assert str(root) == "(x - y)"
        assert root.evaluate({'x': 5, 'y': 2}) == 3

    def test_unbound_variable(self, arith_genome):
        root = arithmetic.decode("+aaaaaa", arith_genome)[0]
        with pytest.raises(EvaluationError):
            root.evaluate({'b': 1.0})

    def test_multigenic(self, arith_genome):
        roots = arithmetic.decode("*aaaaaa" + "aaaaaaa", arith_genome)
        assert len(roots) == 2
        values = [root.evaluate({'a': 3.0}) for root in roots]
        assert arithmetic.sum_linker(values) == 12.0

    def test_unsupported_operator_in_genome(self):
        with pytest.raises(ValueError):
            arithmetic.arithmetic_genome(['a'], 3, operators=['^'])

        g = Genome(['a'], ['%'], max_arity=2, head_length=2)
        with pytest.raises(EvaluationError):
            arithmetic.decode("%aaaa", g)


# ============================================================================
# Registry Tests
# ============================================================================

class TestRegistry:
    """Test the pluggable decoder registry."""

    def test_arithmetic_registered(self):
        assert 'arithmetic' in available_domains()
        assert get_domain('arithmetic') is arithmetic.decode

    def test_unknown_domain(self):
        with pytest.raises(KeyError):
            get_domain('no-such-domain')

    def test_register_custom_domain(self, arith_genome):
        def first_symbol(chromosome, genome):
            return [Leaf(chromosome[0])]

        register_domain('first-symbol', first_symbol)
        assert get_domain('first-symbol')("*aaaaaa", arith_genome)[0].evaluate({}) == '*'
