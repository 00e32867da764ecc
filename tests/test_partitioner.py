"""
Tests for range partitioning and the merge tree derived from it.
"""

import pytest

from sorting import partition, PartitionPlan, RangePartitioner, MergeStep


def segment_lengths(low, high, points):
    bounds = [low] + points + [high + 1]
    return [bounds[i + 1] - bounds[i] for i in range(len(bounds) - 1)]


class TestPartition:
    """Test split point computation."""

    def test_even_lengths(self):
        """Test 100 elements into 4 segments."""
        assert partition(0, 99, 4) == [25, 50, 75]

    def test_uneven_lengths_nearly_level(self):
        """Test 102 elements into 4 segments."""
        points = partition(0, 101, 4)
        assert points == [26, 52, 77]
        assert segment_lengths(0, 101, points) == [26, 26, 25, 25]

    def test_bisect_strategy_matches_midpoint_bisection(self):
        """Test the bisection strategy on the same inputs."""
        assert partition(0, 99, 4, strategy='bisect') == [25, 50, 75]
        assert partition(0, 101, 4, strategy='bisect') == [26, 51, 77]

    def test_too_few_elements(self):
        """Test an empty plan when there are fewer elements than segments."""
        assert partition(0, 2, 4) == []
        assert partition(5, 4, 1) == []

    def test_one_segment(self):
        """Test a single segment needs no split points."""
        assert partition(0, 10, 1) == []

    def test_exactly_one_element_per_segment(self):
        """Test length == segments."""
        assert partition(3, 6, 4) == [4, 5, 6]

    def test_offset_range(self):
        """Test a range not starting at zero."""
        assert partition(10, 19, 2) == [15]

    def test_invalid_segment_count(self):
        """Test segments < 1 is rejected."""
        with pytest.raises(ValueError):
            partition(0, 10, 0)

    def test_bisect_rejects_non_power_of_two(self):
        """Test bisection only works for power-of-two counts."""
        with pytest.raises(ValueError):
            partition(0, 99, 3, strategy='bisect')

    def test_unknown_strategy(self):
        """Test an unknown strategy name."""
        with pytest.raises(ValueError):
            partition(0, 99, 4, strategy='random')

    def test_deterministic(self):
        """Test repeated calls give identical plans."""
        assert all(partition(0, 1000, 7) == partition(0, 1000, 7) for _ in range(10))

    @pytest.mark.parametrize("strategy,segment_counts", [
        ('balanced', range(1, 10)),
        ('bisect', (1, 2, 4, 8)),
    ])
    def test_balance_invariant(self, strategy, segment_counts):
        """Test count, ordering, bounds and balance over many ranges."""
        for segments in segment_counts:
            for low in (0, 3):
                for length in range(segments, 60):
                    high = low + length - 1
                    points = partition(low, high, segments, strategy=strategy)

                    assert len(points) == segments - 1
                    assert all(a < b for a, b in zip(points, points[1:]))
                    assert all(low < p <= high for p in points)
                    lengths = segment_lengths(low, high, points)
                    assert sum(lengths) == length
                    assert max(lengths) - min(lengths) <= 1


class TestPartitionPlan:
    """Test segments and merge tree derived from a plan."""

    def test_segments_cover_range(self):
        """Test segments are contiguous and cover the range."""
        plan = RangePartitioner(0, 101, 4).partition()
        segments = plan.segments()

        assert [(s.low, s.high) for s in segments] == [(0, 25), (26, 51), (52, 76), (77, 101)]
        assert [s.segment_id for s in segments] == [0, 1, 2, 3]
        assert sum(s.n_elements for s in segments) == 102

    def test_empty_plan_is_one_segment(self):
        """Test an empty plan describes the whole range."""
        plan = RangePartitioner(0, 2, 4).partition()
        assert plan.is_empty
        assert plan.n_segments == 1
        assert [(s.low, s.high) for s in plan.segments()] == [(0, 2)]
        assert plan.merge_levels() == []

    def test_merge_tree_four_segments(self):
        """Test 0-1 and 2-3 merge first, then the halves."""
        plan = PartitionPlan(low=0, high=99, requested_segments=4, split_points=[25, 50, 75])
        levels = plan.merge_levels()

        assert levels == [
            [MergeStep(level=1, low=0, mid=24, high=49), MergeStep(level=1, low=50, mid=74, high=99)],
            [MergeStep(level=2, low=0, mid=49, high=99)],
        ]

    def test_merge_tree_odd_segment_count(self):
        """Test an unpaired run moves up a level unchanged."""
        plan = RangePartitioner(0, 29, 3).partition()
        levels = plan.merge_levels()

        assert levels == [
            [MergeStep(level=1, low=0, mid=9, high=19)],
            [MergeStep(level=2, low=0, mid=19, high=29)],
        ]

    @pytest.mark.parametrize("segments,expected_levels", [
        (1, 0), (2, 1), (3, 2), (4, 2), (5, 3), (7, 3), (8, 3), (9, 4), (16, 4),
    ])
    def test_merge_tree_depth(self, segments, expected_levels):
        """Test the tree has ceil(log2(segments)) levels."""
        plan = RangePartitioner(0, 999, segments).partition()
        assert len(plan.merge_levels()) == expected_levels

    def test_merge_boundaries_match_split_points(self):
        """Test every merge boundary falls on a split point."""
        plan = RangePartitioner(0, 1234, 6).partition()
        starts = {plan.low} | set(plan.split_points)
        ends = {p - 1 for p in plan.split_points} | {plan.high}

        for steps in plan.merge_levels():
            for step in steps:
                assert step.low in starts
                assert step.mid in ends
                assert step.high in ends

    def test_merges_within_level_are_disjoint(self):
        """Test merges of the same level never overlap."""
        plan = RangePartitioner(0, 999, 8).partition()
        for steps in plan.merge_levels():
            for a, b in zip(steps, steps[1:]):
                assert a.high < b.low

    def test_partition_stats(self):
        """Test partition statistics."""
        partitioner = RangePartitioner(0, 101, 4)
        stats = partitioner.get_partition_stats(partitioner.partition())

        assert stats['n_segments'] == 4
        assert stats['total_elements'] == 102
        assert stats['min_elements_per_segment'] == 25
        assert stats['max_elements_per_segment'] == 26
        assert stats['merge_levels'] == 2
