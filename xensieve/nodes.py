# xensieve/nodes.py
"""
Sieve expression tree.

Leaves wrap a :class:`~xensieve.residual.Residual`; inner nodes combine
one or two sub-trees with a boolean operator.

Design invariants
-----------------
* Every node is a frozen dataclass (immutable after construction).
* Children are referenced, never copied, so one sub-tree may hang under
  several parents.  There are no parent back-references and no cycles.
* ``contains`` re-walks the whole referenced structure on every call.
  Nothing is cached: a shared sub-tree is evaluated once per parent edge
  that reaches it.
* Trees are walked with an explicit stack (:func:`fold`), never by
  recursion, so depth is bounded by memory only.  Equality, hashing and
  ``repr`` avoid recursion as well.

Operator table (binding strength, tightest first)::

    !   Inversion            prefix
    &   Intersection         left-associative
    ^   SymmetricDifference  left-associative
    |   Union                left-associative
"""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    ClassVar,
    Dict,
    List,
    Sequence,
    Tuple,
    Type,
    TypeVar,
)

from xensieve.residual import Residual

if TYPE_CHECKING:
    from xensieve.visitor import SieveVisitor

__all__ = [
    "SieveNode",
    "Unit",
    "Intersection",
    "Union",
    "SymmetricDifference",
    "Inversion",
    "BINARY_NODES",
    "fold",
    "evaluate",
]

T = TypeVar("T")


class SieveNode(abc.ABC):
    """Base class of all expression tree nodes."""

    __slots__ = ()

    operator: ClassVar[str] = ""
    precedence: ClassVar[int] = 0

    def children(self) -> Tuple["SieveNode", ...]:
        """Direct sub-trees, left to right."""
        return ()

    def combine(self, *flags: bool) -> bool:
        """Membership at this node given the membership of its children."""
        raise NotImplementedError(type(self).__name__)

    def contains(self, value: int) -> bool:
        """Return ``True`` if *value* is a member of the set this node denotes."""
        return evaluate(self, value)

    @abc.abstractmethod
    def accept(self, visitor: "SieveVisitor", *results: Any) -> Any:
        ...

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SieveNode):
            return NotImplemented
        pending = [(self, other)]
        while pending:
            a, b = pending.pop()
            if a is b:
                continue
            if type(a) is not type(b):
                return False
            if isinstance(a, Unit):
                if a.residual != b.residual:
                    return False
                continue
            pending.extend(zip(a.children(), b.children()))
        return True

    def __hash__(self) -> int:
        return fold(self, _hash_step)

    def __str__(self) -> str:
        # visitor imports this module
        from xensieve.visitor import NotationFormatter

        return NotationFormatter().visit(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class Unit(SieveNode):
    residual: Residual

    precedence: ClassVar[int] = 5

    def contains(self, value: int) -> bool:
        return self.residual.contains(value)

    def accept(self, visitor: "SieveVisitor", *results: Any) -> Any:
        return visitor.visit_unit(self, *results)


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class Intersection(SieveNode):
    lhs: SieveNode
    rhs: SieveNode

    operator: ClassVar[str] = "&"
    precedence: ClassVar[int] = 3

    def children(self) -> Tuple[SieveNode, ...]:
        return (self.lhs, self.rhs)

    def combine(self, lhs: bool, rhs: bool) -> bool:
        return lhs and rhs

    def accept(self, visitor: "SieveVisitor", *results: Any) -> Any:
        return visitor.visit_intersection(self, *results)


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class SymmetricDifference(SieveNode):
    lhs: SieveNode
    rhs: SieveNode

    operator: ClassVar[str] = "^"
    precedence: ClassVar[int] = 2

    def children(self) -> Tuple[SieveNode, ...]:
        return (self.lhs, self.rhs)

    def combine(self, lhs: bool, rhs: bool) -> bool:
        return lhs != rhs

    def accept(self, visitor: "SieveVisitor", *results: Any) -> Any:
        return visitor.visit_symmetric_difference(self, *results)


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class Union(SieveNode):
    lhs: SieveNode
    rhs: SieveNode

    operator: ClassVar[str] = "|"
    precedence: ClassVar[int] = 1

    def children(self) -> Tuple[SieveNode, ...]:
        return (self.lhs, self.rhs)

    def combine(self, lhs: bool, rhs: bool) -> bool:
        return lhs or rhs

    def accept(self, visitor: "SieveVisitor", *results: Any) -> Any:
        return visitor.visit_union(self, *results)


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class Inversion(SieveNode):
    part: SieveNode

    operator: ClassVar[str] = "!"
    precedence: ClassVar[int] = 4

    def children(self) -> Tuple[SieveNode, ...]:
        return (self.part,)

    def combine(self, part: bool) -> bool:
        return not part

    def accept(self, visitor: "SieveVisitor", *results: Any) -> Any:
        return visitor.visit_inversion(self, *results)


#: Binary operator symbol → node class.
BINARY_NODES: Dict[str, Type[SieveNode]] = {
    cls.operator: cls for cls in (Intersection, SymmetricDifference, Union)
}


# ═══════════════════════════════════════════════════════════════════════
#  Walks
# ═══════════════════════════════════════════════════════════════════════

def fold(root: SieveNode, step: Callable[[SieveNode, Sequence[T]], T]) -> T:
    """Reduce the tree under *root* bottom-up.

    *step* receives each node together with the results already computed
    for its children, left to right, and returns the node's result.
    Shared sub-trees are reduced once per parent edge.
    """
    # (node, children already scheduled)
    pending: List[Tuple[SieveNode, bool]] = [(root, False)]
    results: List[T] = []
    while pending:
        node, expanded = pending.pop()
        kids = node.children()
        if not kids:
            results.append(step(node, ()))
        elif not expanded:
            pending.append((node, True))
            pending.extend((child, False) for child in reversed(kids))
        else:
            args = results[-len(kids):]
            del results[-len(kids):]
            results.append(step(node, args))
    return results[0]


def evaluate(root: SieveNode, value: int) -> bool:
    """Membership of *value* in the set denoted by *root*."""

    def step(node: SieveNode, flags: Sequence[bool]) -> bool:
        if isinstance(node, Unit):
            return node.residual.contains(value)
        return node.combine(*flags)

    return fold(root, step)


def _hash_step(node: SieveNode, hashes: Sequence[int]) -> int:
    if isinstance(node, Unit):
        return hash((Unit, node.residual))
    return hash((type(node), *hashes))
