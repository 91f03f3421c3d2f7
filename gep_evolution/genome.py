"""
gep_evolution/genome.py - Grammar and shape of GEP chromosomes
"""
from typing import Any, Hashable, Sequence, Tuple


class GenomeError(ValueError):
    """Raised when a genome cannot be built from the given alphabets"""


class Genome:
    """The symbol alphabets and gene shape shared by every chromosome.

    A gene is a head of ``head_length`` symbols drawn from both alphabets
    followed by a tail of terminals only. The tail length is derived from
    the head length and the maximum function arity so that any head can be
    read into a complete expression tree without running past the gene:

        tail_length = head_length * (max_arity - 1) + 1

    Instances are read-only and meant to be shared by reference.
    """

    __slots__ = ('_terminals', '_functions', '_function_set', '_terminal_set',
                 '_max_arity', '_head_length', '_tail_length', '_single_char')

    def __init__(self, terminals: Sequence[Hashable], functions: Sequence[Hashable],
                 max_arity: int, head_length: int):
        terminals = tuple(terminals)
        functions = tuple(functions)

        if not terminals:
            raise GenomeError("Genome needs at least one terminal symbol")
        if max_arity < 1:
            raise GenomeError(f"max_arity must be >= 1, got {max_arity}")
        if head_length < 1:
            raise GenomeError(f"head_length must be >= 1, got {head_length}")
        shared = set(terminals) & set(functions)
        if shared:
            raise GenomeError(f"Symbols in both alphabets: {sorted(map(str, shared))}")

        init = object.__setattr__
        init(self, '_terminals', terminals)
        init(self, '_functions', functions)
        init(self, '_function_set', frozenset(functions))
        init(self, '_terminal_set', frozenset(terminals))
        init(self, '_max_arity', max_arity)
        init(self, '_head_length', head_length)
        init(self, '_tail_length', head_length * (max_arity - 1) + 1)
        init(self, '_single_char', all(isinstance(s, str) and len(s) == 1
                                        for s in terminals + functions))

    def __setattr__(self, name, value):
        raise AttributeError(f"Genome is read-only, cannot set {name!r}")

    def __delattr__(self, name):
        raise AttributeError(f"Genome is read-only, cannot delete {name!r}")

    @property
    def terminals(self) -> Tuple[Hashable, ...]:
        return self._terminals

    @property
    def functions(self) -> Tuple[Hashable, ...]:
        return self._functions

    @property
    def single_char_symbols(self) -> bool:
        """True when every symbol is a one-character string, so chromosomes can be str"""
        return self._single_char

    @property
    def head_length(self) -> int:
        """Head positions may hold terminals or functions"""
        return self._head_length

    @property
    def tail_length(self) -> int:
        """Tail positions may only hold terminals"""
        return self._tail_length

    @property
    def gene_length(self) -> int:
        return self._head_length + self._tail_length

    @property
    def max_arity(self) -> int:
        return self._max_arity

    @property
    def size(self) -> int:
        """Number of symbols in the full alphabet"""
        return len(self._terminals) + len(self._functions)

    @property
    def num_terminals(self) -> int:
        return len(self._terminals)

    @property
    def num_functions(self) -> int:
        return len(self._functions)

    def terminal(self, n: int) -> Hashable:
        return self._terminals[n]

    def function(self, n: int) -> Hashable:
        return self._functions[n]

    def symbol(self, n: int) -> Hashable:
        """Map an index of the full alphabet to a symbol, functions first"""
        if n < 0 or n >= self.size:
            raise IndexError(f"Symbol index {n} outside alphabet of size {self.size}")
        if n < len(self._functions):
            return self._functions[n]
        return self._terminals[n - len(self._functions)]

    def is_function(self, symbol: Any) -> bool:
        return symbol in self._function_set

    def is_terminal(self, symbol: Any) -> bool:
        return symbol in self._terminal_set

    def random_symbol(self, rng) -> Hashable:
        return self.symbol(rng.randrange(self.size))

    def random_terminal(self, rng) -> Hashable:
        return self._terminals[rng.randrange(len(self._terminals))]

    def chromosome_length(self, gene_count: int) -> int:
        return gene_count * self.gene_length

    def is_valid(self, chromosome: Sequence[Hashable]) -> bool:
        """Check length and that every symbol fits its head or tail position"""
        if not chromosome or len(chromosome) % self.gene_length != 0:
            return False

        for pos, symbol in enumerate(chromosome):
            if pos % self.gene_length < self._head_length:
                if not (self.is_function(symbol) or self.is_terminal(symbol)):
                    return False
            elif not self.is_terminal(symbol):
                return False
        return True

    def __eq__(self, other) -> bool:
        if not isinstance(other, Genome):
            return NotImplemented
        return (self._terminals == other._terminals and
                self._functions == other._functions and
                self._max_arity == other._max_arity and
                self._head_length == other._head_length)

    def __hash__(self) -> int:
        return hash((self._terminals, self._functions, self._max_arity, self._head_length))

    def __repr__(self) -> str:
        return (f"Genome(terminals={list(self._terminals)}, functions={list(self._functions)}, "
                f"max_arity={self._max_arity}, head_length={self._head_length})")
