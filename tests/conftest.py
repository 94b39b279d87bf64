# tests/conftest.py
"""
Shared fixtures and helpers for the xensieve test-suite.
"""

from __future__ import annotations

import itertools
from typing import Iterator, List

import pytest

from xensieve.nodes import Union, Unit
from xensieve.parser import infix_to_postfix, tokenize
from xensieve.residual import Residual
from xensieve.sieve import Sieve

#: Window used by the algebraic law tests.
WINDOW = range(-30, 90)

PROBE_VALUES = [-2, -1, 0, 1, 2, 3, 4]


def postfix_texts(notation: str) -> List[str]:
    """Postfix token texts for *notation*."""
    return [t.text for t in infix_to_postfix(tokenize(notation), notation)]


def small_residuals(max_modulus: int) -> List[Residual]:
    """Every residual with modulus 1..max_modulus."""
    return [
        Residual(m, s)
        for m in range(1, max_modulus + 1)
        for s in range(m)
    ]


class PullCounter:
    """Iterable over ``itertools.count(start)`` that records how many values were pulled."""

    def __init__(self, start: int = 0) -> None:
        self.start = start
        self.pulled = 0

    def __iter__(self) -> Iterator[int]:
        for value in itertools.count(self.start):
            self.pulled += 1
            yield value


@pytest.fixture
def union_node():
    """``3@0|3@1`` built directly from nodes."""
    return Union(Unit(Residual(3, 0)), Unit(Residual(3, 1)))


@pytest.fixture
def sieve_3_4():
    return Sieve("3@0|4@0")
