# xensieve/grammar.py
"""
Parsimonious PEG grammar for sieve notation.

The grammar only *tokenizes*: operator precedence is applied afterwards
by the shunting-yard pass in :mod:`xensieve.parser`, and residual
literals are validated against the ``residual`` rule one word at a time
so that a malformed literal can be reported on its own.

Rules
-----
``notation``
    Whole input: whitespace-separated tokens.
``word``
    A run of characters that may form a residual literal.  Anything a
    residual could be mistyped as (letters, signs, extra ``@``) lands
    here and is rejected later with a literal error.
``residual``
    ``integer "@" integer`` — the only valid shape of a word.
"""

from __future__ import annotations

from parsimonious.grammar import Grammar

__all__ = ["NOTATION_GRAMMAR", "NOTATION_RULES"]

NOTATION_RULES = r'''
    notation    = _ (token _)*
    token       = operator / lparen / rparen / word

    operator    = "&" / "|" / "^" / "!"
    lparen      = "("
    rparen      = ")"
    word        = ~r"[\w@.+\-]+"

    residual    = integer "@" integer
    integer     = ~r"[0-9]+"

    _           = ~r"\s*"
'''

NOTATION_GRAMMAR = Grammar(NOTATION_RULES)
