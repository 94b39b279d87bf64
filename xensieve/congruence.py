# xensieve/congruence.py
"""
Combination of two residual classes into one.

The integers satisfying both ``x ≡ s1 (mod m1)`` and ``x ≡ s2 (mod m2)``
form a single residual class, or none at all.  :func:`intersection`
computes it with a Chinese-Remainder style procedure whose modular
inverse is found either by a linear search (:func:`meziriac`, named for
Bachet de Méziriac) or by the extended Euclidean algorithm
(:func:`euclid_inverse`).

The linear search is the default.  Its cost grows with the moduli, which
is acceptable for the small periods sieves are built from; switch to
``InverseStrategy.EUCLID`` for large moduli.
"""

from __future__ import annotations

import enum
import logging
from typing import Tuple

from xensieve.elements import DEFAULT_ELEMENT_TYPE, ElementType
from xensieve.errors import InvariantError

logger = logging.getLogger(__name__)

__all__ = [
    "InverseStrategy",
    "gcd",
    "meziriac",
    "euclid_inverse",
    "intersection",
]

#: The empty residual as a ``(modulus, shift)`` pair.
EMPTY: Tuple[int, int] = (0, 0)


class InverseStrategy(enum.Enum):
    """How :func:`intersection` finds a modular inverse."""

    SEARCH = "search"
    EUCLID = "euclid"


def gcd(n: int, m: int) -> int:
    """Greatest common divisor of two strictly positive integers."""
    if n <= 0 or m <= 0:
        raise InvariantError(
            f"gcd requires strictly positive operands, got ({n}, {m})"
        )
    while m != 0:
        if m < n:
            n, m = m, n
        m = m % n
    return n


def meziriac(a: int, b: int, element_type: ElementType = DEFAULT_ELEMENT_TYPE) -> int:
    """Find ``g`` with ``(g * a) % b == 1`` by trying ``g = 1, 2, …``.

    By convention ``g`` is 1 when ``b == 1`` and 0 when ``a == b``.  The
    search is bounded by ``element_type.max``; running out means *a* and
    *b* were not coprime, which callers guarantee against.
    """
    if b == 1:
        return 1
    if a == b:
        return 0
    g = 1
    while g < element_type.max:
        if (g * a) % b == 1:
            return g
        g += 1
    raise InvariantError(
        f"no modular inverse of {a} mod {b} within {element_type.name}"
    )


def euclid_inverse(a: int, b: int) -> int:
    """Modular inverse of *a* modulo *b* by the extended Euclidean algorithm.

    Follows the same conventions as :func:`meziriac`.
    """
    if b == 1:
        return 1
    if a == b:
        return 0
    old_r, r = a % b, b
    old_t, t = 1, 0
    while r != 0:
        q = old_r // r
        old_r, r = r, old_r - q * r
        old_t, t = t, old_t - q * t
    if old_r != 1:
        raise InvariantError(f"{a} and {b} are not coprime")
    return old_t % b


def intersection(
    m1: int,
    m2: int,
    s1: int,
    s2: int,
    element_type: ElementType = DEFAULT_ELEMENT_TYPE,
    strategy: InverseStrategy = InverseStrategy.SEARCH,
) -> Tuple[int, int]:
    """Return ``(modulus, shift)`` of the integers in both ``m1@s1`` and ``m2@s2``.

    ``(0, 0)`` means no integer satisfies both.  The result modulus is the
    least common multiple of the operands and must fit *element_type*.

    >>> intersection(4, 3, 0, 1)
    (12, 4)
    >>> intersection(5, 10, 2, 3)
    (0, 0)
    """
    if m1 == 0 or m2 == 0:
        # intersection of empty and anything is empty
        return EMPTY
    s1 %= m1
    s2 %= m2
    # order by shift so the span is non-negative
    if s2 < s1:
        m1, m2, s1, s2 = m2, m1, s2, s1

    d = gcd(m1, m2)
    md1 = m1 // d
    md2 = m2 // d
    span = abs(s2 - s1)

    if d != 1 and span % d != 0:
        logger.debug("%d@%d & %d@%d: no common solution", m1, s1, m2, s2)
        return EMPTY

    if strategy is InverseStrategy.EUCLID:
        g = euclid_inverse(md1, md2)
    else:
        g = meziriac(md1, md2, element_type)

    m = element_type.check(md1 * md2 * d, "combined modulus")
    shift = (s1 + g * span * md1) % m
    logger.debug("%d@%d & %d@%d -> %d@%d", m1, s1, m2, s2, m, shift)
    return m, shift
