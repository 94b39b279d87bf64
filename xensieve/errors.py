# xensieve/errors.py
"""
Sieve error types.

Architecture Overview:
─────────────────────
┌─────────────────────────────────────────────────────────────────────────────┐
│                          Error Hierarchy                                    │
├─────────────────────────────────────────────────────────────────────────────┤
│  SieveError (base)                                                          │
│  ├── SieveParseError        - Any failure turning notation into a tree      │
│  │   ├── LexicalError       - Characters that form no token                 │
│  │   │   └── ResidualLiteralError - Malformed / out-of-range ``M@S``        │
│  │   └── SieveSyntaxError   - Operator/parenthesis structure violations     │
│  │       ├── MissingOperandError                                            │
│  │       ├── MismatchedParenthesisError                                     │
│  │       ├── EmptyExpressionError                                           │
│  │       └── DanglingOperandError                                           │
│  ├── ElementRangeError      - Value not representable in the element type   │
│  ├── UnknownElementTypeError                                                │
│  ├── ElementTypeMismatchError                                               │
│  └── InvariantError         - Internal contract breach (fail fast)          │
└─────────────────────────────────────────────────────────────────────────────┘

Error Codes:
────────────
Each error carries a code ``XSV-NNNN``:
  - 0001-0999: Lexical / literal errors
  - 1000-1999: Syntax errors
  - 2000-2999: Element type errors
  - 9000-9999: Internal errors

A merge with no common solution is *not* an error: it yields the empty
residual ``0@0``.
"""

from __future__ import annotations

from enum import Enum, unique
from typing import Any, Optional, Sequence


@unique
class ErrorPhase(Enum):
    """Stage of processing where the error occurred."""

    LEXICAL = "lexical"        # Tokenization / literal validation
    SYNTAX = "syntax"          # Operator precedence / stack evaluation
    ELEMENT = "element"        # Element type checks
    INTERNAL = "internal"      # Broken invariants


class ErrorCode:
    """
    Structured error code ``PREFIX-NNNN``.
    """

    __slots__ = ("prefix", "number", "phase", "title")

    def __init__(self, prefix: str, number: int, phase: ErrorPhase, title: str) -> None:
        self.prefix = prefix
        self.number = number
        self.phase = phase
        self.title = title

    @property
    def code(self) -> str:
        """Get the full error code string."""
        return f"{self.prefix}-{self.number:04d}"

    def __str__(self) -> str:
        return self.code

    def __repr__(self) -> str:
        return f"ErrorCode({self.code!r}, {self.title!r})"

    def __hash__(self) -> int:
        return hash((self.prefix, self.number))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ErrorCode):
            return self.prefix == other.prefix and self.number == other.number
        if isinstance(other, str):
            return self.code == other
        return False


class SieveErrorCodes:
    """Predefined error codes."""

    # LEXICAL ERRORS (0001-0999)
    INVALID_CHARACTER = ErrorCode("XSV", 1, ErrorPhase.LEXICAL, "invalid character")
    MALFORMED_RESIDUAL = ErrorCode("XSV", 2, ErrorPhase.LEXICAL, "malformed residual literal")
    RESIDUAL_OUT_OF_RANGE = ErrorCode("XSV", 3, ErrorPhase.LEXICAL, "residual literal out of range")

    # SYNTAX ERRORS (1000-1999)
    UNEXPECTED_TOKEN = ErrorCode("XSV", 1000, ErrorPhase.SYNTAX, "unexpected token")
    MISSING_OPERAND = ErrorCode("XSV", 1001, ErrorPhase.SYNTAX, "missing operand")
    MISMATCHED_PARENTHESIS = ErrorCode("XSV", 1002, ErrorPhase.SYNTAX, "mismatched parenthesis")
    EMPTY_EXPRESSION = ErrorCode("XSV", 1003, ErrorPhase.SYNTAX, "empty expression")
    DANGLING_OPERAND = ErrorCode("XSV", 1004, ErrorPhase.SYNTAX, "dangling operand")

    # ELEMENT TYPE ERRORS (2000-2999)
    VALUE_OUT_OF_RANGE = ErrorCode("XSV", 2001, ErrorPhase.ELEMENT, "value out of range")
    UNKNOWN_ELEMENT_TYPE = ErrorCode("XSV", 2002, ErrorPhase.ELEMENT, "unknown element type")
    ELEMENT_TYPE_MISMATCH = ErrorCode("XSV", 2003, ErrorPhase.ELEMENT, "element type mismatch")

    # INTERNAL ERRORS (9000-9999)
    INVARIANT_VIOLATED = ErrorCode("XSV", 9001, ErrorPhase.INTERNAL, "invariant violated")


# ═══════════════════════════════════════════════════════════════════════════════
# EXCEPTION CLASSES
# ═══════════════════════════════════════════════════════════════════════════════

class SieveError(Exception):
    """
    Base exception for all xensieve errors.
    """

    default_code: ErrorCode = SieveErrorCodes.INVARIANT_VIOLATED

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        hint: str = "",
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.hint = hint

    def __str__(self) -> str:
        text = f"error: {self.message} [{self.code}]"
        if self.hint:
            text += f"\n  hint: {self.hint}"
        return text


# ───────────────────────────────────────────────────────────────────────────────
# PARSE ERRORS
# ───────────────────────────────────────────────────────────────────────────────

class SieveParseError(SieveError, ValueError):
    """Notation could not be turned into a sieve.

    ``position`` is the 0-based offset into ``source`` of the offending
    token (``-1`` when the error concerns the expression as a whole).
    """

    default_code = SieveErrorCodes.UNEXPECTED_TOKEN

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        source: str = "",
        position: int = -1,
        token: str = "",
        hint: str = "",
    ) -> None:
        super().__init__(message, code=code, hint=hint)
        self.source = source
        self.position = position
        self.token = token

    def __str__(self) -> str:
        # GCC-style: <source>:<column>: error: <message> [<code>]
        column = self.position + 1 if self.position >= 0 else 0
        lines = [f"{self.source!r}:{column}: error: {self.message} [{self.code}]"]
        if self.source and self.position >= 0:
            lines.append(f"    {self.source}")
            lines.append(f"    {' ' * self.position}{'^' * max(1, len(self.token))}")
        if self.hint:
            lines.append(f"  hint: {self.hint}")
        return "\n".join(lines)


class LexicalError(SieveParseError):
    """Error during tokenization."""

    default_code = SieveErrorCodes.INVALID_CHARACTER


class ResidualLiteralError(LexicalError):
    """A word token is not a valid ``M@S`` residual literal."""

    default_code = SieveErrorCodes.MALFORMED_RESIDUAL


class SieveSyntaxError(SieveParseError):
    """Operators, operands and parentheses do not form an expression."""

    default_code = SieveErrorCodes.UNEXPECTED_TOKEN


class MissingOperandError(SieveSyntaxError):
    """An operator found fewer operands than it needs."""

    default_code = SieveErrorCodes.MISSING_OPERAND


class MismatchedParenthesisError(SieveSyntaxError):
    default_code = SieveErrorCodes.MISMATCHED_PARENTHESIS


class EmptyExpressionError(SieveSyntaxError):
    """Evaluation finished with nothing on the operand stack."""

    default_code = SieveErrorCodes.EMPTY_EXPRESSION


class DanglingOperandError(SieveSyntaxError):
    """Evaluation finished with more than one value on the operand stack."""

    default_code = SieveErrorCodes.DANGLING_OPERAND


# ───────────────────────────────────────────────────────────────────────────────
# ELEMENT TYPE ERRORS
# ───────────────────────────────────────────────────────────────────────────────

class ElementRangeError(SieveError, OverflowError):
    """A value does not fit the sieve's element type."""

    default_code = SieveErrorCodes.VALUE_OUT_OF_RANGE

    def __init__(self, message: str, value: Any = None, element_type: str = "", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.value = value
        self.element_type = element_type


class UnknownElementTypeError(SieveError, KeyError):
    default_code = SieveErrorCodes.UNKNOWN_ELEMENT_TYPE

    def __init__(self, name: str, known: Sequence[str] = ()) -> None:
        super().__init__(
            f"unknown element type {name!r}",
            hint=f"Expected one of: {', '.join(known)}" if known else "",
        )
        self.name = name


class ElementTypeMismatchError(SieveError, TypeError):
    """Two sieves with different element types were combined."""

    default_code = SieveErrorCodes.ELEMENT_TYPE_MISMATCH


# ───────────────────────────────────────────────────────────────────────────────
# INTERNAL ERRORS
# ───────────────────────────────────────────────────────────────────────────────

class InvariantError(SieveError, AssertionError):
    """An internal contract was broken; this indicates a bug upstream."""

    default_code = SieveErrorCodes.INVARIANT_VIOLATED


__all__ = [
    "ErrorPhase",
    "ErrorCode",
    "SieveErrorCodes",
    "SieveError",
    "SieveParseError",
    "LexicalError",
    "ResidualLiteralError",
    "SieveSyntaxError",
    "MissingOperandError",
    "MismatchedParenthesisError",
    "EmptyExpressionError",
    "DanglingOperandError",
    "ElementRangeError",
    "UnknownElementTypeError",
    "ElementTypeMismatchError",
    "InvariantError",
]
