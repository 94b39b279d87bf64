#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
xensieve/visitor.py
===================

Visitor infrastructure for sieve expression trees.

Provides:
- ``SieveVisitor`` — base class dispatching on node type
- ``DepthFirstVisitor`` — visits every node, parents first
- ``BottomUpVisitor`` — visits children first, passing their results up
- ``NotationFormatter`` — renders a tree back to notation text
- ``ResidualCollector`` — distinct leaf residuals in sorted order
- ``NodeCounter`` — number of node visits one evaluation performs
- ``IntersectionMerger`` — folds intersections of residuals into one

Traversals keep their own stack instead of recursing, so arbitrarily
deep trees (long ``|`` chains, stacked ``!``) are handled.
"""

from __future__ import annotations

from typing import Any, List, Sequence, Set

from xensieve import nodes as N
from xensieve.congruence import InverseStrategy
from xensieve.elements import DEFAULT_ELEMENT_TYPE, ElementType
from xensieve.residual import Residual

__all__ = [
    "SieveVisitor",
    "DepthFirstVisitor",
    "BottomUpVisitor",
    "NotationFormatter",
    "ResidualCollector",
    "NodeCounter",
    "IntersectionMerger",
]


class SieveVisitor:
    """Base class for sieve tree visitors.

    Each ``visit_X`` method corresponds to a node type.  The default
    implementations call ``generic_visit``, which does nothing.
    Subclasses override the methods they care about.
    """

    def visit(self, node: N.SieveNode) -> Any:
        """Dispatch to the appropriate visit method."""
        return node.accept(self)

    def generic_visit(self, node: N.SieveNode) -> Any:
        """Called when no specific visitor method exists."""
        return None

    def visit_unit(self, node: N.Unit, *results: Any) -> Any:
        return self.generic_visit(node)

    def visit_intersection(self, node: N.Intersection, *results: Any) -> Any:
        return self.generic_visit(node)

    def visit_union(self, node: N.Union, *results: Any) -> Any:
        return self.generic_visit(node)

    def visit_symmetric_difference(self, node: N.SymmetricDifference, *results: Any) -> Any:
        return self.generic_visit(node)

    def visit_inversion(self, node: N.Inversion, *results: Any) -> Any:
        return self.generic_visit(node)


class DepthFirstVisitor(SieveVisitor):
    """Visits every node, parent before children, left to right.

    Shared sub-trees are visited once per parent edge.
    """

    def visit(self, node: N.SieveNode) -> None:
        pending = [node]
        while pending:
            current = pending.pop()
            current.accept(self)
            pending.extend(reversed(current.children()))


class BottomUpVisitor(SieveVisitor):
    """Visits children before parents.

    ``visit_X(node, *results)`` receives the values returned for the
    node's children, left to right; ``visit`` returns the root's value.
    """

    def visit(self, node: N.SieveNode) -> Any:
        return N.fold(node, self._step)

    def _step(self, node: N.SieveNode, results: Sequence[Any]) -> Any:
        return node.accept(self, *results)


class NotationFormatter(BottomUpVisitor):
    """Render a tree as notation text.

    Binary operands are parenthesised only where the operator table
    requires it, so the output parses back to an equivalent tree.
    Inversions always render as ``!(…)``.
    """

    def visit_unit(self, node: N.Unit) -> str:
        return str(node.residual)

    def _binary(self, node: N.SieveNode, lhs: str, rhs: str) -> str:
        if node.lhs.precedence < node.precedence:
            lhs = f"({lhs})"
        # left-associative: an equal-precedence right operand needs grouping
        if node.rhs.precedence <= node.precedence:
            rhs = f"({rhs})"
        return f"{lhs}{node.operator}{rhs}"

    visit_intersection = _binary
    visit_union = _binary
    visit_symmetric_difference = _binary

    def visit_inversion(self, node: N.Inversion, part: str) -> str:
        return f"!({part})"


class ResidualCollector(DepthFirstVisitor):
    """Collect the distinct residuals at the leaves of a tree."""

    def __init__(self) -> None:
        self._seen: Set[Residual] = set()

    def visit_unit(self, node: N.Unit, *results: Any) -> None:
        self._seen.add(node.residual)

    @property
    def residuals(self) -> List[Residual]:
        return sorted(self._seen)


class NodeCounter(DepthFirstVisitor):
    """Count node visits, i.e. the work of one ``contains`` call."""

    def __init__(self) -> None:
        self.count = 0

    def generic_visit(self, node: N.SieveNode) -> None:
        self.count += 1


class IntersectionMerger(BottomUpVisitor):
    """Rebuild a tree with every intersection of two residuals merged.

    ``3@0&4@1`` becomes the single residual ``12@9``; merging proceeds
    bottom-up, so chains such as ``2@0&3@0&5@0`` collapse entirely.
    Sub-trees with nothing to merge are returned as-is (still shared).
    """

    def __init__(
        self,
        element_type: ElementType = DEFAULT_ELEMENT_TYPE,
        strategy: InverseStrategy = InverseStrategy.SEARCH,
    ) -> None:
        self.element_type = element_type
        self.strategy = strategy

    def visit_unit(self, node: N.Unit) -> N.SieveNode:
        return node

    def visit_intersection(
        self, node: N.Intersection, lhs: N.SieveNode, rhs: N.SieveNode,
    ) -> N.SieveNode:
        if isinstance(lhs, N.Unit) and isinstance(rhs, N.Unit):
            return N.Unit(lhs.residual.merge(rhs.residual, self.element_type, self.strategy))
        return self._rebuild(node, lhs, rhs)

    def visit_union(self, node: N.Union, lhs: N.SieveNode, rhs: N.SieveNode) -> N.SieveNode:
        return self._rebuild(node, lhs, rhs)

    def visit_symmetric_difference(
        self, node: N.SymmetricDifference, lhs: N.SieveNode, rhs: N.SieveNode,
    ) -> N.SieveNode:
        return self._rebuild(node, lhs, rhs)

    def visit_inversion(self, node: N.Inversion, part: N.SieveNode) -> N.SieveNode:
        return node if part is node.part else N.Inversion(part)

    @staticmethod
    def _rebuild(node: N.SieveNode, lhs: N.SieveNode, rhs: N.SieveNode) -> N.SieveNode:
        if lhs is node.lhs and rhs is node.rhs:
            return node
        return type(node)(lhs, rhs)
