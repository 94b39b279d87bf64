# xensieve/config.py
"""Tuning knobs shared by parsing, merging and evaluation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Union

from xensieve import elements
from xensieve.congruence import InverseStrategy
from xensieve.elements import DEFAULT_ELEMENT_TYPE, ElementType

__all__ = ["SieveConfig", "DEFAULT_CONFIG"]

# moduli past this make the linear inverse search noticeably slow
_SEARCH_WARN_BITS = 64


@dataclass(frozen=True)
class SieveConfig:
    """Element type and modular inverse strategy for one sieve."""

    element_type: ElementType = DEFAULT_ELEMENT_TYPE
    inverse_strategy: InverseStrategy = InverseStrategy.SEARCH

    @classmethod
    def from_names(
        cls,
        element_type: Optional[Union[str, ElementType]] = None,
        inverse_strategy: Optional[Union[str, InverseStrategy]] = None,
    ) -> "SieveConfig":
        """Build a config from CLI-style strings; ``None`` keeps the default."""
        kwargs = {}
        if element_type is not None:
            kwargs["element_type"] = elements.element_type(element_type)
        if inverse_strategy is not None:
            kwargs["inverse_strategy"] = InverseStrategy(inverse_strategy)
        return cls(**kwargs)

    def validate(self) -> List[str]:
        """Return a list of validation warnings (empty if valid)."""
        warnings: List[str] = []
        if (
            self.inverse_strategy is InverseStrategy.SEARCH
            and self.element_type.bits > _SEARCH_WARN_BITS
        ):
            warnings.append(
                f"inverse search over {self.element_type.name} may be slow for "
                "large moduli; consider inverse_strategy=euclid"
            )
        if not self.element_type.signed:
            warnings.append(
                f"{self.element_type.name} is unsigned; negative values "
                "cannot be tested for membership"
            )
        return warnings


DEFAULT_CONFIG = SieveConfig()
