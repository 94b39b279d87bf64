# tests/test_nodes.py
"""
Tests for the expression tree nodes and the visitors over them.
"""

import dataclasses
import sys

import pytest

from xensieve.nodes import (
    BINARY_NODES,
    Intersection,
    Inversion,
    SymmetricDifference,
    Union,
    Unit,
)
from xensieve.parser import parse_notation
from xensieve.residual import Residual
from xensieve.visitor import (
    IntersectionMerger,
    NodeCounter,
    NotationFormatter,
    ResidualCollector,
)
from tests.conftest import PROBE_VALUES, WINDOW


def unit(m, s=0):
    return Unit(Residual(m, s))


class TestContains:

    def test_unit(self):
        node = unit(3, 0)
        for value, member in zip([-3, -2, -1, 0, 1], [True, False, False, True, False]):
            assert node.contains(value) is member

    def test_union(self, union_node):
        expected = [True, False, True, True, False, True, True]
        assert [union_node.contains(v) for v in PROBE_VALUES] == expected

    def test_intersection(self):
        node = Intersection(unit(2), unit(3))
        assert node.contains(0)
        assert not node.contains(1)
        assert not node.contains(3)
        assert node.contains(6)

    def test_symmetric_difference(self):
        node = SymmetricDifference(unit(2), unit(3))
        assert not node.contains(0)
        assert node.contains(3)
        assert not node.contains(6)

    def test_inversion(self):
        node = Inversion(unit(3))
        assert not node.contains(0)
        assert node.contains(1)
        assert node.contains(2)


class TestLaws:

    A = unit(3, 1)
    B = Union(unit(4, 0), unit(5, 2))

    def test_intersection_law(self):
        node = Intersection(self.A, self.B)
        for v in WINDOW:
            assert node.contains(v) == (self.A.contains(v) and self.B.contains(v))

    def test_union_law(self):
        node = Union(self.A, self.B)
        for v in WINDOW:
            assert node.contains(v) == (self.A.contains(v) or self.B.contains(v))

    def test_symmetric_difference_law(self):
        node = SymmetricDifference(self.A, self.B)
        for v in WINDOW:
            assert node.contains(v) == (self.A.contains(v) ^ self.B.contains(v))

    def test_inversion_law(self):
        node = Inversion(self.B)
        for v in WINDOW:
            assert node.contains(v) == (not self.B.contains(v))

    def test_double_inversion(self):
        node = Inversion(Inversion(self.B))
        for v in WINDOW:
            assert node.contains(v) == self.B.contains(v)

    def test_empty_residual_leaf(self):
        node = Inversion(unit(0))
        assert all(node.contains(v) for v in WINDOW)


class TestStructure:

    def test_frozen(self):
        node = Intersection(unit(2), unit(3))
        with pytest.raises(dataclasses.FrozenInstanceError):
            node.lhs = unit(5)

    def test_structural_equality(self):
        assert Union(unit(3), unit(4)) == Union(unit(3), unit(4))
        assert Union(unit(3), unit(4)) != Union(unit(4), unit(3))
        assert Union(unit(3), unit(4)) != Intersection(unit(3), unit(4))

    def test_shared_subtree(self):
        shared = Union(unit(3), unit(4))
        a = Intersection(shared, unit(5))
        b = Inversion(shared)
        assert a.lhs is shared
        assert b.part is shared

    def test_binary_table(self):
        assert BINARY_NODES == {
            "&": Intersection,
            "^": SymmetricDifference,
            "|": Union,
        }

    def test_precedence_order(self):
        assert (Inversion.precedence > Intersection.precedence
                > SymmetricDifference.precedence > Union.precedence)


class TestNotationFormatter:

    @pytest.mark.parametrize("node, expected", [
        (unit(3, 0), "3@0"),
        (Intersection(unit(3), unit(5)), "3@0&5@0"),
        (Union(unit(3, 1), unit(4)), "3@1|4@0"),
        (SymmetricDifference(unit(3, 1), unit(4)), "3@1^4@0"),
        (Inversion(unit(3, 1)), "!(3@1)"),
        (Intersection(Union(unit(3), unit(4)), unit(5)), "(3@0|4@0)&5@0"),
        (Union(unit(3), Intersection(unit(4), unit(5))), "3@0|4@0&5@0"),
        (Union(unit(3), Union(unit(4), unit(5))), "3@0|(4@0|5@0)"),
        (Union(Union(unit(3), unit(4)), unit(5)), "3@0|4@0|5@0"),
        (Intersection(Inversion(unit(3)), unit(5)), "!(3@0)&5@0"),
    ])
    def test_render(self, node, expected):
        assert NotationFormatter().visit(node) == expected
        assert str(node) == expected

    @pytest.mark.parametrize("notation", [
        "3@0|4@0&5@1",
        "(3@0|4@0)&5@1",
        "3@0|(4@0|5@0)",
        "!(3@0|4@1)^2@0",
        "3@0^(4@0^5@0)",
        "(3@0^4@1)&!(5@0|7@3)",
    ])
    def test_render_reparses(self, notation):
        tree = parse_notation(notation)
        assert parse_notation(str(tree)) == tree


class TestResidualCollector:

    def test_distinct_sorted(self):
        node = parse_notation("5@1|3@0|5@6&3@0")
        collector = ResidualCollector()
        collector.visit(node)
        assert collector.residuals == [Residual(3, 0), Residual(5, 1)]

    def test_includes_inverted(self):
        collector = ResidualCollector()
        collector.visit(Inversion(unit(7, 2)))
        assert collector.residuals == [Residual(7, 2)]


class TestNodeCounter:

    def test_single(self):
        counter = NodeCounter()
        counter.visit(unit(3))
        assert counter.count == 1

    def test_shared_subtree_counted_per_edge(self):
        shared = Union(unit(3), unit(4))
        root = Intersection(shared, shared)
        counter = NodeCounter()
        counter.visit(root)
        assert counter.count == 7


class TestIntersectionMerger:

    def test_pair(self):
        merged = IntersectionMerger().visit(parse_notation("3@0&4@1"))
        assert merged == unit(12, 9)

    def test_chain(self):
        merged = IntersectionMerger().visit(parse_notation("2@0&3@0&5@0"))
        assert merged == unit(30, 0)

    def test_no_solution(self):
        merged = IntersectionMerger().visit(parse_notation("5@2&10@3"))
        assert merged == unit(0, 0)

    def test_inside_union(self):
        merged = IntersectionMerger().visit(parse_notation("3@0&4@1|5@0"))
        assert merged == Union(unit(12, 9), unit(5, 0))

    def test_untouched_subtree_is_shared(self):
        tree = parse_notation("(3@0|4@0)&5@0")
        merged = IntersectionMerger().visit(tree)
        assert merged is tree

    def test_inversion_blocks_merge(self):
        tree = parse_notation("!(3@0)&4@0")
        assert IntersectionMerger().visit(tree) is tree

    def test_preserves_membership(self):
        tree = parse_notation("(2@1&3@2)|!(4@0&6@2)^(5@3&7@1)")
        merged = IntersectionMerger().visit(tree)
        for v in WINDOW:
            assert merged.contains(v) == tree.contains(v)


class TestDeepTrees:

    DEPTH = sys.getrecursionlimit() + 200

    @pytest.fixture(scope="class")
    def union_chain(self):
        # left-associated: DEPTH - 1 nested unions
        return parse_notation("|".join(f"{m}@0" for m in range(2, self.DEPTH + 2)))

    def test_contains(self, union_chain):
        assert union_chain.contains(0)
        assert union_chain.contains(2)
        assert not union_chain.contains(1)

    def test_inversion_stack(self):
        node = parse_notation("!" * self.DEPTH + "3@0")
        assert node.contains(0) is (self.DEPTH % 2 == 0)
        assert node.contains(1) is (self.DEPTH % 2 == 1)

    def test_render_reparses(self, union_chain):
        text = str(union_chain)
        assert text.startswith("2@0|3@0|4@0")
        again = parse_notation(text)
        assert again == union_chain
        assert hash(again) == hash(union_chain)

    def test_repr(self, union_chain):
        assert repr(union_chain).startswith("Union('2@0|3@0")

    def test_counter(self, union_chain):
        counter = NodeCounter()
        counter.visit(union_chain)
        assert counter.count == 2 * self.DEPTH - 1

    def test_collector(self, union_chain):
        collector = ResidualCollector()
        collector.visit(union_chain)
        assert len(collector.residuals) == self.DEPTH

    def test_merger(self):
        node = parse_notation("&".join(["2@0"] * self.DEPTH))
        assert IntersectionMerger().visit(node) == unit(2, 0)

    def test_shared_subtree_walked_per_edge(self):
        shared = parse_notation("3@0|4@0")
        node = shared
        for _ in range(self.DEPTH):
            node = Intersection(node, shared)
        counter = NodeCounter()
        counter.visit(node)
        assert counter.count == 3 + self.DEPTH * 4
        assert node.contains(4)
        assert not node.contains(5)


class TestEqualityAndHash:

    def test_equal_trees_hash_equal(self):
        a = parse_notation("(3@0|4@1)&!5@2")
        b = parse_notation("(3@3|4@5)&!(5@7)")
        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_different_shape(self):
        assert parse_notation("3@0|4@0|5@0") != parse_notation("3@0|(4@0|5@0)")

    def test_not_equal_to_other_types(self):
        assert unit(3) != Residual(3, 0)
        assert unit(3) != "3@0"

    def test_repr(self):
        assert repr(Intersection(unit(3), unit(5, 1))) == "Intersection('3@0&5@1')"
