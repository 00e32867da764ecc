"""
Tests for the single-threaded merge sort.
"""

import sys

import numpy as np
import pytest

from sorting import sort_range, sort_single_thread, InvalidRangeError


class TestSortSingleThread:
    """Test sorting whole sequences."""

    def test_single_element(self):
        """Test a single-element sequence is unchanged."""
        values = [0]
        sort_single_thread(values)
        assert values == [0]

    def test_empty(self):
        """Test an empty sequence."""
        values = []
        sort_single_thread(values)
        assert values == []

    def test_small_reversed(self):
        """Test [9..1]."""
        values = [9, 8, 7, 6, 5, 4, 3, 2, 1]
        sort_single_thread(values)
        assert values == [1, 2, 3, 4, 5, 6, 7, 8, 9]

    def test_even_length(self):
        """Test an even number of elements."""
        values = [4, 3, 2, 1]
        sort_single_thread(values)
        assert values == [1, 2, 3, 4]

    def test_odd_length(self):
        """Test an odd number of elements."""
        values = [5, 4, 3, 2, 1]
        sort_single_thread(values)
        assert values == [1, 2, 3, 4, 5]

    def test_random_matches_sorted(self, random_values):
        """Test random input against the built-in sort."""
        expected = sorted(random_values)
        sort_single_thread(random_values)
        assert random_values == expected

    def test_numpy_array(self, random_array):
        """Test sorting a numpy array in place."""
        expected = np.sort(random_array)
        original_id = id(random_array)
        sort_single_thread(random_array)
        assert id(random_array) == original_id
        np.testing.assert_array_equal(random_array, expected)

    def test_all_equal(self):
        """Test a sequence of identical values."""
        values = [7] * 33
        sort_single_thread(values)
        assert values == [7] * 33

    def test_extreme_values(self):
        """Test int64 extremes."""
        big = 2**63 - 1
        small = -2**63
        values = [0, big, small, -1, big, small]
        sort_single_thread(values)
        assert values == [small, small, -1, 0, big, big]

    def test_long_input_is_not_limited_by_recursion(self):
        """Test an input much longer than the recursion limit."""
        n = sys.getrecursionlimit() * 20
        values = list(range(n, 0, -1))
        sort_single_thread(values)
        assert values == list(range(1, n + 1))


class TestSortRange:
    """Test sorting sub-ranges."""

    def test_sorts_only_range(self):
        """Test positions outside the range are untouched."""
        values = [9, 5, 4, 3, 2, 0]
        sort_range(values, 1, 4)
        assert values == [9, 2, 3, 4, 5, 0]

    def test_single_index_noop(self):
        """Test low == high leaves the sequence unchanged."""
        values = [3, 2, 1]
        sort_range(values, 1, 1)
        assert values == [3, 2, 1]

    def test_low_above_high_noop(self):
        """Test an empty range is a no-op."""
        values = [3, 2, 1]
        sort_range(values, 2, 1)
        assert values == [3, 2, 1]

    def test_out_of_bounds(self):
        """Test a range past the end raises."""
        values = [3, 2, 1]
        with pytest.raises(InvalidRangeError):
            sort_range(values, 0, 3)

    @pytest.mark.parametrize("n", range(0, 18))
    def test_all_small_lengths(self, n):
        """Test every length up to 17 in reverse order."""
        values = list(range(n, 0, -1))
        sort_single_thread(values)
        assert values == list(range(1, n + 1))
