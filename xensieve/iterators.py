# xensieve/iterators.py
"""
Lazy sequence transformers over a sieve.

Each function takes a membership predicate and a caller-owned iterable
of integers, and returns a generator.  Values are pulled from the input
one at a time; nothing is buffered, so infinite inputs such as
``itertools.count()`` are fine.  A generator is single-pass: call the
function again with a fresh iterable to start over.
"""

from __future__ import annotations

from typing import Callable, Iterable, Iterator, Optional

__all__ = ["iter_value", "iter_state", "iter_interval"]

Predicate = Callable[[int], bool]


def iter_value(contains: Predicate, values: Iterable[int]) -> Iterator[int]:
    """Yield the members of *values*, in input order.

    >>> from xensieve import Sieve
    >>> list(iter_value(Sieve("3@0|4@0").contains, range(13)))
    [0, 3, 4, 6, 8, 9, 12]
    """
    for value in values:
        if contains(value):
            yield value


def iter_state(contains: Predicate, values: Iterable[int]) -> Iterator[bool]:
    """Yield one membership flag per input value."""
    for value in values:
        yield contains(value)


def iter_interval(contains: Predicate, values: Iterable[int]) -> Iterator[int]:
    """Yield the gaps between consecutive members of *values*.

    The first member only primes the tracker, so ``n`` members give
    ``n - 1`` intervals.  Gaps are non-negative for non-decreasing input.
    """
    last: Optional[int] = None
    for value in values:
        if not contains(value):
            continue
        if last is not None:
            yield value - last
        last = value
