"""xensieve — Xenakis sieves for Python.

A sieve is a subset of the integers built from residual classes
(``M@S``: the integers congruent to ``S`` modulo ``M``) combined with
``&`` (intersection), ``|`` (union), ``^`` (symmetric difference) and
``!`` (inversion).

Submodules
----------
elements
    Fixed-width element types (``i8`` … ``u128``) bounding all values.
errors
    Coded exception hierarchy (``XSV-NNNN``).
congruence
    The merge of two residual classes (gcd, modular inverse).
residual
    The ``Residual`` value type.
nodes / visitor
    The immutable expression tree and its traversals.
grammar / parser
    Notation tokenizer (parsimonious) and shunting-yard parser.
iterators
    Lazy value / state / interval transformers.
sieve
    The ``Sieve`` façade.
main
    CLI entry-point: ``python -m xensieve``.

Usage
-----
Programmatic::

    from xensieve import Sieve

    s = Sieve("3@0|5@1")
    list(s.iter_value(range(15)))   # [0, 1, 3, 6, 9, 11, 12]
    7 in s                          # False

Command-line::

    python -m xensieve values "3@0|5@1" --stop 15
"""

from __future__ import annotations

from xensieve.config import SieveConfig
from xensieve.congruence import InverseStrategy
from xensieve.elements import ELEMENT_TYPES, ElementType, element_type
from xensieve.errors import SieveError, SieveParseError
from xensieve.parser import parse_notation
from xensieve.residual import Residual
from xensieve.sieve import Sieve

__version__: str = "0.1.0"
__all__: list[str] = [
    "__version__",
    "Sieve",
    "Residual",
    "SieveConfig",
    "InverseStrategy",
    "ElementType",
    "ELEMENT_TYPES",
    "element_type",
    "SieveError",
    "SieveParseError",
    "parse_notation",
]
