# xensieve/sieve.py
"""
The :class:`Sieve` façade.

A ``Sieve`` owns a reference to one expression tree root plus the
:class:`~xensieve.config.SieveConfig` it was built with.  Combining
sieves wraps their roots in a new node without copying or evaluating
anything, so sub-trees end up shared between sieves.

Usage::

    >>> s = Sieve("3@0|5@1")
    >>> [v for v in range(15) if v in s]
    [0, 1, 3, 6, 9, 11, 12]
    >>> str(s & Sieve("2@0"))
    'Sieve{(3@0|5@1)&2@0}'
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Optional

from xensieve import iterators
from xensieve.config import DEFAULT_CONFIG, SieveConfig
from xensieve.elements import ElementType
from xensieve.errors import ElementTypeMismatchError
from xensieve.nodes import (
    Intersection,
    Inversion,
    SieveNode,
    SymmetricDifference,
    Union,
    Unit,
)
from xensieve.parser import parse_notation
from xensieve.residual import Residual
from xensieve.visitor import IntersectionMerger, NodeCounter, ResidualCollector

logger = logging.getLogger(__name__)

__all__ = ["Sieve"]


class Sieve:
    """A Xenakis sieve built from notation such as ``"3@0|5@1"``.

    The representation follows Ariza (2005), "The Xenakis Sieve as
    Object", Computer Music Journal 29(2).

    Parameters
    ----------
    notation:
        Residual literals ``M@S`` joined by ``&`` (intersection),
        ``|`` (union), ``^`` (symmetric difference) and prefix ``!``
        (inversion), with parentheses for grouping.
    config:
        Element type and inverse strategy; defaults to ``i128`` with the
        linear inverse search.

    Raises
    ------
    SieveParseError
        If *notation* is not valid.
    """

    __slots__ = ("_root", "_config")

    def __init__(self, notation: str, config: Optional[SieveConfig] = None) -> None:
        self._config = config or DEFAULT_CONFIG
        self._root = parse_notation(notation, self._config)

    @classmethod
    def from_node(cls, root: SieveNode, config: Optional[SieveConfig] = None) -> "Sieve":
        """Wrap an existing tree root; the root is shared, not copied."""
        sieve = cls.__new__(cls)
        sieve._root = root
        sieve._config = config or DEFAULT_CONFIG
        return sieve

    @classmethod
    def from_residual(cls, residual: Residual, config: Optional[SieveConfig] = None) -> "Sieve":
        return cls.from_node(Unit(residual), config)

    # ── Properties ─────────────────────────────────────────────────

    @property
    def root(self) -> SieveNode:
        return self._root

    @property
    def config(self) -> SieveConfig:
        return self._config

    @property
    def element_type(self) -> ElementType:
        return self._config.element_type

    @property
    def notation(self) -> str:
        """Notation text that parses back to an equivalent sieve."""
        return str(self._root)

    # ── Membership ─────────────────────────────────────────────────

    def contains(self, value: int) -> bool:
        """Return ``True`` if *value* is in the sieve.

        Raises :class:`~xensieve.errors.ElementRangeError` if *value* does
        not fit the sieve's element type.

        >>> s = Sieve("3@0 & 5@0")
        >>> s.contains(15), s.contains(16), s.contains(30)
        (True, False, True)
        """
        return self._root.contains(self._config.element_type.check(value))

    def __contains__(self, value: int) -> bool:
        return self.contains(value)

    # ── Combinators ────────────────────────────────────────────────

    def _combine(self, other: "Sieve", node_cls) -> "Sieve":
        if other.element_type != self.element_type:
            raise ElementTypeMismatchError(
                f"cannot combine a {self.element_type.name} sieve with a "
                f"{other.element_type.name} sieve"
            )
        return Sieve.from_node(node_cls(self._root, other._root), self._config)

    def intersect(self, other: "Sieve") -> "Sieve":
        """Values in both sieves."""
        return self._combine(other, Intersection)

    def union(self, other: "Sieve") -> "Sieve":
        """Values in either sieve."""
        return self._combine(other, Union)

    def symmetric_difference(self, other: "Sieve") -> "Sieve":
        """Values in exactly one of the two sieves."""
        return self._combine(other, SymmetricDifference)

    def invert(self) -> "Sieve":
        """Values not in this sieve."""
        return Sieve.from_node(Inversion(self._root), self._config)

    def __and__(self, other: object) -> "Sieve":
        if not isinstance(other, Sieve):
            return NotImplemented
        return self.intersect(other)

    def __or__(self, other: object) -> "Sieve":
        if not isinstance(other, Sieve):
            return NotImplemented
        return self.union(other)

    def __xor__(self, other: object) -> "Sieve":
        if not isinstance(other, Sieve):
            return NotImplemented
        return self.symmetric_difference(other)

    def __invert__(self) -> "Sieve":
        return self.invert()

    # ── Sequence transformers ──────────────────────────────────────

    def iter_value(self, values: Iterable[int]) -> Iterator[int]:
        """Iterate the members of *values*.

        >>> list(Sieve("3@0|4@0").iter_value(range(13)))
        [0, 3, 4, 6, 8, 9, 12]
        """
        return iterators.iter_value(self.contains, values)

    def iter_state(self, values: Iterable[int]) -> Iterator[bool]:
        """Iterate the membership flag of each of *values*."""
        return iterators.iter_state(self.contains, values)

    def iter_interval(self, values: Iterable[int]) -> Iterator[int]:
        """Iterate the gaps between consecutive members of *values*."""
        return iterators.iter_interval(self.contains, values)

    # ── Introspection ──────────────────────────────────────────────

    def residuals(self) -> List[Residual]:
        """Distinct residuals at the leaves, in ``(modulus, shift)`` order."""
        collector = ResidualCollector()
        collector.visit(self._root)
        return collector.residuals

    def merged(self) -> "Sieve":
        """Return an equivalent sieve with residual intersections merged.

        >>> str(Sieve("3@0&4@1|5@0").merged())
        'Sieve{12@9|5@0}'
        """
        merger = IntersectionMerger(self.element_type, self._config.inverse_strategy)
        root = merger.visit(self._root)
        logger.debug("merged %s -> %s", self._root, root)
        return Sieve.from_node(root, self._config)

    def evaluation_cost(self) -> int:
        """Node visits performed by one membership test."""
        counter = NodeCounter()
        counter.visit(self._root)
        return counter.count

    def __copy__(self) -> "Sieve":
        return Sieve.from_node(self._root, self._config)

    def __str__(self) -> str:
        return f"Sieve{{{self.notation}}}"

    def __repr__(self) -> str:
        return f"Sieve({self.notation!r})"
