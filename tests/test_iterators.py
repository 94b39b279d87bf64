# tests/test_iterators.py
"""
Tests for the lazy value / state / interval transformers.
"""

import itertools

import pytest

from xensieve import iterators
from xensieve.sieve import Sieve
from tests.conftest import PullCounter


class TestIterValue:

    def test_window(self, sieve_3_4):
        assert list(sieve_3_4.iter_value(range(13))) == [0, 3, 4, 6, 8, 9, 12]

    def test_input_order_kept(self, sieve_3_4):
        assert list(sieve_3_4.iter_value([12, 1, 3, 3, -4])) == [12, 3, 3, -4]

    def test_infinite_input(self, sieve_3_4):
        values = sieve_3_4.iter_value(itertools.count(17))
        assert next(values) == 18
        assert next(values) == 20

    def test_empty_input(self, sieve_3_4):
        assert list(sieve_3_4.iter_value([])) == []

    def test_plain_predicate(self):
        assert list(iterators.iter_value(lambda v: v % 2 == 0, range(5))) == [0, 2, 4]


class TestIterState:

    def test_window(self, sieve_3_4):
        assert list(sieve_3_4.iter_state(range(7))) == [
            True, False, False, True, True, False, True,
        ]

    def test_one_flag_per_value(self, sieve_3_4):
        values = list(range(-10, 40))
        assert len(list(sieve_3_4.iter_state(values))) == len(values)

    def test_infinite_input(self, sieve_3_4):
        states = sieve_3_4.iter_state(itertools.count(17))
        assert list(itertools.islice(states, 4)) == [False, True, False, True]


class TestIterInterval:

    def test_window(self, sieve_3_4):
        assert list(sieve_3_4.iter_interval(range(13))) == [3, 1, 2, 2, 1, 3]

    def test_infinite_input(self, sieve_3_4):
        intervals = sieve_3_4.iter_interval(itertools.count(17))
        assert list(itertools.islice(intervals, 3)) == [2, 1, 3]

    def test_single_member_gives_nothing(self, sieve_3_4):
        assert list(sieve_3_4.iter_interval(range(3))) == []

    def test_no_members(self):
        assert list(Sieve("5@1&5@2").iter_interval(range(50))) == []

    def test_n_minus_one(self):
        s = Sieve("2@0|7@3")
        values = range(-20, 60)
        assert len(list(s.iter_interval(values))) == len(list(s.iter_value(values))) - 1

    def test_sum_spans_members(self):
        s = Sieve("3@1^5@0")
        members = list(s.iter_value(range(100)))
        assert sum(s.iter_interval(range(100))) == members[-1] - members[0]


class TestLaziness:

    @pytest.mark.parametrize("name", ["iter_value", "iter_state", "iter_interval"])
    def test_nothing_pulled_before_first_next(self, sieve_3_4, name):
        source = PullCounter()
        getattr(sieve_3_4, name)(source)
        assert source.pulled == 0

    def test_value_pulls_only_what_it_needs(self, sieve_3_4):
        source = PullCounter()
        values = sieve_3_4.iter_value(source)
        assert list(itertools.islice(values, 3)) == [0, 3, 4]
        assert source.pulled == 5

    def test_state_pulls_one_per_item(self, sieve_3_4):
        source = PullCounter(5)
        states = sieve_3_4.iter_state(source)
        next(states)
        next(states)
        assert source.pulled == 2

    def test_single_pass(self, sieve_3_4):
        values = sieve_3_4.iter_value(range(10))
        assert list(values) == [0, 3, 4, 6, 8, 9]
        assert list(values) == []

    def test_independent_generators(self, sieve_3_4):
        a = sieve_3_4.iter_value(range(10))
        b = sieve_3_4.iter_value(range(10))
        next(a)
        next(a)
        assert next(b) == 0
