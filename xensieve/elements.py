# xensieve/elements.py
"""
Element types for sieve arithmetic.

Python integers are unbounded, so the width a sieve works in is carried
explicitly.  An :class:`ElementType` names one fixed-width integer
(``i8`` … ``i128``, ``u8`` … ``u128``) and supplies the bounds that the
rest of the package checks caller values against.  Its ``max`` also
bounds the brute-force modular-inverse search in
:mod:`xensieve.congruence`.

Construction from literals, ordering, arithmetic and ``abs`` are
provided by ``int`` itself; an element type only constrains the range.

Example::

    >>> from xensieve.elements import element_type
    >>> u8 = element_type("u8")
    >>> u8.max
    255
    >>> u8.contains(-1)
    False
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Final, Tuple, Union

from xensieve.errors import ElementRangeError, UnknownElementTypeError

__all__ = [
    "ElementType",
    "I8", "I16", "I32", "I64", "I128",
    "U8", "U16", "U32", "U64", "U128",
    "DEFAULT_ELEMENT_TYPE",
    "ELEMENT_TYPES",
    "element_type",
]


@dataclass(frozen=True, slots=True)
class ElementType:
    """A fixed-width integer type: ``bits`` wide, signed or unsigned."""

    name: str
    bits: int
    signed: bool
    min: int = field(init=False, repr=False, compare=False)
    max: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.signed:
            lo, hi = -(1 << (self.bits - 1)), (1 << (self.bits - 1)) - 1
        else:
            lo, hi = 0, (1 << self.bits) - 1
        object.__setattr__(self, "min", lo)
        object.__setattr__(self, "max", hi)

    @property
    def bounds(self) -> Tuple[int, int]:
        return self.min, self.max

    def contains(self, value: int) -> bool:
        """Return ``True`` if *value* is representable in this type."""
        return self.min <= value <= self.max

    def check(self, value: int, what: str = "value") -> int:
        """Return *value* unchanged, or raise :class:`ElementRangeError`."""
        if not self.contains(value):
            raise ElementRangeError(
                f"{what} {value} is outside the range of {self.name} "
                f"[{self.min}, {self.max}]",
                value=value,
                element_type=self.name,
            )
        return value

    def __str__(self) -> str:
        return self.name


I8: Final = ElementType("i8", 8, True)
I16: Final = ElementType("i16", 16, True)
I32: Final = ElementType("i32", 32, True)
I64: Final = ElementType("i64", 64, True)
I128: Final = ElementType("i128", 128, True)
U8: Final = ElementType("u8", 8, False)
U16: Final = ElementType("u16", 16, False)
U32: Final = ElementType("u32", 32, False)
U64: Final = ElementType("u64", 64, False)
U128: Final = ElementType("u128", 128, False)

DEFAULT_ELEMENT_TYPE: Final = I128

ELEMENT_TYPES: Final[Dict[str, ElementType]] = {
    et.name: et for et in (I8, I16, I32, I64, I128, U8, U16, U32, U64, U128)
}


def element_type(spec: Union[str, ElementType]) -> ElementType:
    """Resolve an element type by name (``"i64"``, ``"u8"`` …)."""
    if isinstance(spec, ElementType):
        return spec
    try:
        return ELEMENT_TYPES[spec.lower()]
    except KeyError:
        raise UnknownElementTypeError(spec, known=sorted(ELEMENT_TYPES)) from None
