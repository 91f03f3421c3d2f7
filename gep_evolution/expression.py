"""
gep_evolution/expression.py - Expression trees and pluggable chromosome decoders

The engine itself knows nothing about what symbols mean. An expression
domain supplies a decoder, a callable ``decoder(chromosome, genome)`` that
returns one expression tree per gene, and registers it under a name.
"""
from abc import ABC, abstractmethod
from collections import deque
from typing import Any, Callable, Dict, Hashable, List, Mapping, Sequence

from .genome import Genome


class EvaluationError(ArithmeticError):
    """Raised when an expression cannot be decoded or evaluated"""


class ExpressionNode(ABC):
    """Base class for decoded expression tree nodes"""

    def __init__(self, symbol: Hashable):
        self.symbol = symbol
        self.children: List['ExpressionNode'] = []

    @property
    def arity(self) -> int:
        return len(self.children)

    @abstractmethod
    def evaluate(self, bindings: Mapping[str, Any]) -> Any:
        """Evaluate the subtree rooted here against bound inputs"""
        pass

    def get_all_nodes(self) -> List['ExpressionNode']:
        """Get all nodes in this subtree"""
        nodes = [self]
        for child in self.children:
            nodes.extend(child.get_all_nodes())
        return nodes

    def get_depth(self) -> int:
        if not self.children:
            return 1
        return 1 + max(child.get_depth() for child in self.children)


Decoder = Callable[[Sequence[Hashable], Genome], List[ExpressionNode]]


def decode_gene(gene: Sequence[Hashable], arity: Callable[[Hashable], int],
                make_node: Callable[[Hashable], ExpressionNode]) -> ExpressionNode:
    """Read a gene breadth first into an expression tree.

    The first symbol is the root; each following symbol fills the next open
    argument slot, level by level. Reading stops as soon as every slot is
    filled, so the unused end of the gene (usually part of the tail) is
    ignored.
    """
    if not gene:
        raise EvaluationError("Cannot decode an empty gene")

    root = make_node(gene[0])
    pending = deque([(root, arity(gene[0]))])
    pos = 1

    while pending:
        node, slots = pending.popleft()
        for _ in range(slots):
            if pos >= len(gene):
                raise EvaluationError(f"Gene ran out of symbols at position {pos}")
            symbol = gene[pos]
            pos += 1
            child = make_node(symbol)
            node.children.append(child)
            pending.append((child, arity(symbol)))

    return root


_DOMAINS: Dict[str, Decoder] = {}


def register_domain(name: str, decoder: Decoder) -> Decoder:
    """Register a decoder under ``name``; re-registering replaces it"""
    _DOMAINS[name] = decoder
    return decoder


def get_domain(name: str) -> Decoder:
    if name not in _DOMAINS:
        raise KeyError(f"Unknown expression domain: {name}")
    return _DOMAINS[name]


def available_domains() -> List[str]:
    return sorted(_DOMAINS)
