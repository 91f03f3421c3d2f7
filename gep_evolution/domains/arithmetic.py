"""
gep_evolution/domains/arithmetic.py - Arithmetic expressions over named variables

Terminals are variable names looked up in the bindings; functions are the
binary operators ``+ - * /``. Values may be plain numbers or numpy arrays,
so one evaluation can cover a whole grid of test points.
"""
from typing import Any, Hashable, List, Mapping, Sequence

import numpy as np

from ..chromosome import genes
from ..expression import EvaluationError, ExpressionNode, decode_gene, register_domain
from ..genome import Genome

OPERATORS = ('+', '-', '*', '/')


class Variable(ExpressionNode):
    """Input variable bound by name"""

    def evaluate(self, bindings: Mapping[str, Any]) -> Any:
        try:
            return bindings[self.symbol]
        except KeyError:
            raise EvaluationError(f"Unbound variable: {self.symbol}") from None

    def __str__(self):
        return str(self.symbol)


class BinaryOp(ExpressionNode):
    """Binary operations: add, sub, mul, div with guards"""

    def evaluate(self, bindings: Mapping[str, Any]) -> Any:
        if len(self.children) != 2:
            raise EvaluationError(f"{self.symbol} needs 2 operands, has {len(self.children)}")
        left_val = self.children[0].evaluate(bindings)
        right_val = self.children[1].evaluate(bindings)

        if self.symbol == '+':
            return np.add(left_val, right_val)
        elif self.symbol == '-':
            return np.subtract(left_val, right_val)
        elif self.symbol == '*':
            return np.multiply(left_val, right_val)
        elif self.symbol == '/':
            # Protected division
            divisor = np.where(np.abs(right_val) < 1e-10, 1.0, right_val)
            return np.divide(left_val, divisor)
        raise EvaluationError(f"Unknown operator: {self.symbol}")

    def __str__(self):
        left, right = self.children
        return f"({left} {self.symbol} {right})"


def _make_node(genome: Genome):
    def make_node(symbol: Hashable) -> ExpressionNode:
        if genome.is_function(symbol):
            if symbol not in OPERATORS:
                raise EvaluationError(f"Unsupported arithmetic function: {symbol}")
            return BinaryOp(symbol)
        return Variable(symbol)
    return make_node


def decode(chromosome: Sequence[Hashable], genome: Genome) -> List[ExpressionNode]:
    """Decode every gene of an arithmetic chromosome"""
    make_node = _make_node(genome)

    def arity(symbol: Hashable) -> int:
        return 2 if genome.is_function(symbol) else 0

    return [decode_gene(gene, arity, make_node) for gene in genes(genome, chromosome)]


def sum_linker(values: Sequence[Any]) -> Any:
    """Link the values of a multigenic chromosome by addition"""
    total = values[0]
    for value in values[1:]:
        total = np.add(total, value)
    return total


def arithmetic_genome(variables: Sequence[str], head_length: int,
                      operators: Sequence[str] = OPERATORS) -> Genome:
    """Genome for arithmetic expressions over ``variables``"""
    unknown = [op for op in operators if op not in OPERATORS]
    if unknown:
        raise ValueError(f"Unsupported operators: {unknown}")
    return Genome(tuple(variables), tuple(operators), max_arity=2, head_length=head_length)


def express_chromosome(chromosome: Sequence[Hashable], genome: Genome) -> List[str]:
    """Infix strings for each gene of a chromosome"""
    return [str(root) for root in decode(chromosome, genome)]


register_domain('arithmetic', decode)
