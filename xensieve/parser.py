"""xensieve/parser.py – sieve notation → expression tree.

Pipeline
--------
1. :func:`tokenize` splits the text with the parsimonious grammar in
   :mod:`xensieve.grammar` and validates each residual literal.
2. :func:`infix_to_postfix` reorders the tokens with the shunting-yard
   algorithm.
3. :func:`parse_postfix` evaluates the postfix sequence on one operand
   stack, building :mod:`xensieve.nodes` objects.

:func:`parse_notation` runs all three.

Operator precedence (committed; tightest first)
-----------------------------------------------
::

    !   4   prefix
    &   3   left-associative
    ^   2   left-associative
    |   1   left-associative

So ``3@0|4@0&5@1`` reads as ``3@0|(4@0&5@1)`` and ``!3@0&5@0`` as
``(!3@0)&5@0``.

Errors
------
Literal problems raise :class:`~xensieve.errors.ResidualLiteralError`,
stray characters :class:`~xensieve.errors.LexicalError`, and structural
problems a :class:`~xensieve.errors.SieveSyntaxError` subclass.  All of
them derive from :class:`~xensieve.errors.SieveParseError`.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Dict, Final, List, Optional, Sequence, Tuple

from parsimonious.exceptions import IncompleteParseError, ParseError
from parsimonious.nodes import NodeVisitor

from xensieve.config import DEFAULT_CONFIG, SieveConfig
from xensieve.elements import DEFAULT_ELEMENT_TYPE, ElementType
from xensieve.errors import (
    DanglingOperandError,
    EmptyExpressionError,
    LexicalError,
    MismatchedParenthesisError,
    MissingOperandError,
    ResidualLiteralError,
    SieveErrorCodes,
)
from xensieve.grammar import NOTATION_GRAMMAR
from xensieve.nodes import BINARY_NODES, Inversion, SieveNode, Unit
from xensieve.residual import Residual

logger = logging.getLogger(__name__)

__all__ = [
    "TokenKind",
    "Token",
    "PRECEDENCE",
    "tokenize",
    "residual_to_ints",
    "infix_to_postfix",
    "parse_postfix",
    "parse_notation",
]

INVERT: Final = Inversion.operator

#: Operator symbol → binding strength.
PRECEDENCE: Final[Dict[str, int]] = {
    INVERT: Inversion.precedence,
    **{op: cls.precedence for op, cls in BINARY_NODES.items()},
}

_LITERAL_HINT = "write residuals as MODULUS@SHIFT with non-negative integers, e.g. 3@0"


class TokenKind(enum.Enum):
    RESIDUAL = "residual"
    OPERATOR = "operator"
    LPAREN = "lparen"
    RPAREN = "rparen"


@dataclass(frozen=True, slots=True)
class Token:
    """One lexical unit of notation.

    ``value`` holds the validated ``(modulus, shift)`` of residual tokens.
    """

    kind: TokenKind
    text: str
    position: int = -1
    value: Optional[Tuple[int, int]] = None

    def __str__(self) -> str:
        return self.text


# ═══════════════════════════════════════════════════════════════════════
#  Tokenizer
# ═══════════════════════════════════════════════════════════════════════

class _TokenBuilder(NodeVisitor):
    """Turns the parsimonious parse tree into a flat token list."""

    def generic_visit(self, node, visited_children):
        return visited_children

    def visit_notation(self, node, visited_children):
        _, pairs = visited_children
        return [token for token, _ in pairs]

    def visit_token(self, node, visited_children):
        return visited_children[0]

    def visit_operator(self, node, visited_children):
        return Token(TokenKind.OPERATOR, node.text, node.start)

    def visit_lparen(self, node, visited_children):
        return Token(TokenKind.LPAREN, node.text, node.start)

    def visit_rparen(self, node, visited_children):
        return Token(TokenKind.RPAREN, node.text, node.start)

    def visit_word(self, node, visited_children):
        return Token(TokenKind.RESIDUAL, node.text, node.start)


def residual_to_ints(
    text: str,
    element_type: ElementType = DEFAULT_ELEMENT_TYPE,
    source: str = "",
    position: int = -1,
) -> Tuple[int, int]:
    """Parse an ``M@S`` literal into ``(modulus, shift)`` integers.

    Both components must be non-negative decimal integers representable
    in *element_type*.
    """
    try:
        tree = NOTATION_GRAMMAR["residual"].parse(text)
    except ParseError as exc:
        count = text.count("@")
        if count != 1:
            message = f"residual literal {text!r} must contain exactly one '@', found {count}"
        else:
            message = f"residual literal {text!r} has a non-integer component"
        raise ResidualLiteralError(
            message, source=source or text, position=max(position, 0),
            token=text, hint=_LITERAL_HINT,
        ) from exc

    modulus_node, _, shift_node = tree.children
    values = []
    for part in (modulus_node, shift_node):
        value = int(part.text)
        if not element_type.contains(value):
            raise ResidualLiteralError(
                f"{part.text} in residual literal {text!r} is outside the range "
                f"of {element_type.name}",
                code=SieveErrorCodes.RESIDUAL_OUT_OF_RANGE,
                source=source or text,
                position=max(position, 0),
                token=text,
            )
        values.append(value)
    return values[0], values[1]


def tokenize(text: str, element_type: ElementType = DEFAULT_ELEMENT_TYPE) -> List[Token]:
    """Split notation *text* into tokens, validating residual literals."""
    try:
        tree = NOTATION_GRAMMAR.parse(text)
    except (ParseError, IncompleteParseError) as exc:
        pos = exc.pos if exc.pos >= 0 else 0
        char = text[pos] if pos < len(text) else ""
        raise LexicalError(
            f"invalid character {char!r}",
            source=text, position=pos, token=char,
        ) from exc

    tokens = []
    for token in _TokenBuilder().visit(tree):
        if token.kind is TokenKind.RESIDUAL:
            value = residual_to_ints(token.text, element_type, source=text, position=token.position)
            token = Token(token.kind, token.text, token.position, value)
        tokens.append(token)
    logger.debug("tokens for %r: %s", text, [t.text for t in tokens])
    return tokens


# ═══════════════════════════════════════════════════════════════════════
#  Shunting-yard
# ═══════════════════════════════════════════════════════════════════════

def infix_to_postfix(tokens: Sequence[Token], source: str = "") -> List[Token]:
    """Reorder infix *tokens* into postfix (reverse Polish) order."""
    output: List[Token] = []
    stack: List[Token] = []
    # True when the previous token completed an operand
    after_operand = False

    for token in tokens:
        if token.kind is TokenKind.RESIDUAL:
            output.append(token)
            after_operand = True
        elif token.kind is TokenKind.LPAREN:
            stack.append(token)
            after_operand = False
        elif token.kind is TokenKind.RPAREN:
            while stack and stack[-1].kind is not TokenKind.LPAREN:
                output.append(stack.pop())
            if not stack:
                raise MismatchedParenthesisError(
                    "unmatched ')'", source=source,
                    position=token.position, token=token.text,
                )
            stack.pop()
            after_operand = True
        elif token.text == INVERT:
            if after_operand:
                raise MissingOperandError(
                    "'!' follows an operand; it must precede the operand it inverts",
                    source=source, position=token.position, token=token.text,
                )
            stack.append(token)
        else:
            precedence = PRECEDENCE[token.text]
            while (
                stack
                and stack[-1].kind is TokenKind.OPERATOR
                and PRECEDENCE[stack[-1].text] >= precedence
            ):
                output.append(stack.pop())
            stack.append(token)
            after_operand = False

    while stack:
        token = stack.pop()
        if token.kind is TokenKind.LPAREN:
            raise MismatchedParenthesisError(
                "unclosed '('", source=source,
                position=token.position, token=token.text,
            )
        output.append(token)

    logger.debug("postfix: %s", " ".join(t.text for t in output))
    return output


# ═══════════════════════════════════════════════════════════════════════
#  Postfix evaluation
# ═══════════════════════════════════════════════════════════════════════

def parse_postfix(
    tokens: Sequence[Token],
    config: SieveConfig = DEFAULT_CONFIG,
    source: str = "",
) -> SieveNode:
    """Build an expression tree from postfix *tokens*."""
    stack: List[SieveNode] = []

    for token in tokens:
        if token.kind is TokenKind.RESIDUAL:
            modulus, shift = token.value or residual_to_ints(
                token.text, config.element_type, source=source, position=token.position,
            )
            stack.append(Unit(Residual(modulus, shift)))
        elif token.text == INVERT:
            if not stack:
                raise MissingOperandError(
                    "'!' has no operand", source=source,
                    position=token.position, token=token.text,
                )
            stack.append(Inversion(stack.pop()))
        elif token.text in BINARY_NODES:
            if len(stack) < 2:
                raise MissingOperandError(
                    f"{token.text!r} needs two operands, found {len(stack)}",
                    source=source, position=token.position, token=token.text,
                )
            rhs = stack.pop()
            lhs = stack.pop()
            stack.append(BINARY_NODES[token.text](lhs, rhs))
        else:
            raise MismatchedParenthesisError(
                f"unexpected {token.text!r} in postfix sequence",
                source=source, position=token.position, token=token.text,
            )

    if not stack:
        raise EmptyExpressionError("notation contains no residual", source=source)
    if len(stack) > 1:
        raise DanglingOperandError(
            f"{len(stack)} operands left without an operator between them",
            source=source,
            hint="join residuals with &, | or ^",
        )
    return stack[0]


def parse_notation(text: str, config: Optional[SieveConfig] = None) -> SieveNode:
    """Parse sieve notation into the root of an expression tree.

    >>> str(parse_notation("3@0 | 5@1"))
    '3@0|5@1'
    """
    config = config or DEFAULT_CONFIG
    tokens = tokenize(text, config.element_type)
    return parse_postfix(infix_to_postfix(tokens, source=text), config, source=text)
