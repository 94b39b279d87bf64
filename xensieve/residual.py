# xensieve/residual.py
"""
Residual classes: the integers congruent to ``shift`` modulo ``modulus``.

A modulus of 0 denotes the empty set.  Residuals are normalised on
construction so that two residuals describing the same set compare
equal, and ordered by ``(modulus, shift)`` so that collections of them
sort deterministically.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from xensieve.congruence import InverseStrategy, intersection
from xensieve.elements import DEFAULT_ELEMENT_TYPE, ElementType
from xensieve.errors import InvariantError

__all__ = ["Residual"]


@dataclass(frozen=True, order=True, slots=True)
class Residual:
    """A residual class ``modulus@shift``.

    ``0 <= shift < modulus`` holds after construction; ``Residual(0, s)``
    is always ``0@0``, the empty residual.

    >>> str(Residual(5, 8))
    '5@3'
    >>> str(Residual(0, 2))
    '0@0'
    """

    modulus: int
    shift: int = 0

    def __post_init__(self) -> None:
        if self.modulus < 0:
            raise InvariantError(f"negative modulus {self.modulus}")
        if self.modulus == 0:
            object.__setattr__(self, "shift", 0)
        else:
            object.__setattr__(self, "shift", self.shift % self.modulus)

    @classmethod
    def empty(cls) -> "Residual":
        return cls(0, 0)

    @classmethod
    def from_notation(cls, text: str, element_type: Optional[ElementType] = None) -> "Residual":
        """Build a residual from a single ``M@S`` literal."""
        # parser imports this module
        from xensieve.parser import residual_to_ints

        modulus, shift = residual_to_ints(text.strip(), element_type or DEFAULT_ELEMENT_TYPE)
        return cls(modulus, shift)

    @property
    def is_empty(self) -> bool:
        return self.modulus == 0

    def contains(self, value: int) -> bool:
        """Return ``True`` if *value* belongs to this residual class."""
        if self.modulus == 0:
            return False
        return (value - self.shift) % self.modulus == 0

    def __contains__(self, value: int) -> bool:
        return self.contains(value)

    def merge(
        self,
        other: "Residual",
        element_type: ElementType = DEFAULT_ELEMENT_TYPE,
        strategy: InverseStrategy = InverseStrategy.SEARCH,
    ) -> "Residual":
        """Return the residual containing exactly the values in both.

        No common value is not an error: it yields ``0@0``.

        Raises
        ------
        ElementRangeError
            If the combined modulus does not fit *element_type*.
        """
        m, s = intersection(
            self.modulus, other.modulus, self.shift, other.shift,
            element_type=element_type, strategy=strategy,
        )
        return Residual(m, s)

    def __and__(self, other: object) -> "Residual":
        if not isinstance(other, Residual):
            return NotImplemented
        return self.merge(other)

    def __str__(self) -> str:
        return f"{self.modulus}@{self.shift}"
