"""
Zero-Value Table Unit Tests
Tests for imt/merkle/zeroes.py
"""
import pytest

from fixtures.common import naive_root, sum_hash, tuple_hash
from imt.merkle.zeroes import build_merkle_root, compute_zeroes, max_leaves, parent_level
from imt.schemas.errors import CapacityExceededException


class TestComputeZeroes:
    """Tests for compute_zeroes()."""

    def test_table_length_and_values(self):
        """One zero per level below the root, each the hash of the previous."""
        zeroes, empty_root = compute_zeroes(sum_hash, depth=4, zero_value=1, arity=2)

        assert zeroes == (1, 2, 4, 8)
        assert empty_root == 16

    def test_depth_one(self):
        """depth 1: the table holds only the zero value."""
        zeroes, empty_root = compute_zeroes(tuple_hash, depth=1, zero_value="z", arity=3)

        assert zeroes == ("z",)
        assert empty_root == ("z", "z", "z")

    def test_independent_of_content(self):
        """The table depends only on hash, depth, zero value and arity."""
        assert compute_zeroes(sum_hash, 3, 0, 2) == compute_zeroes(sum_hash, 3, 0, 2)


class TestMaxLeaves:
    """Tests for max_leaves()."""

    def test_powers(self):
        """Capacity is arity ** depth."""
        assert max_leaves(2, 2) == 4
        assert max_leaves(3, 3) == 27
        assert max_leaves(5, 1) == 1

    def test_exact_for_large_trees(self):
        """Integer math, no float rounding."""
        assert max_leaves(64, 2) == 18446744073709551616


class TestParentLevel:
    """Tests for parent_level()."""

    def test_pads_last_group_with_zero(self):
        """Missing children in the last window take the zero value."""
        assert parent_level(tuple_hash, ["a", "b", "c"], "_", 2) == [("a", "b"), ("c", "_")]

    def test_parent_count(self):
        """ceil(len / arity) parents."""
        assert len(parent_level(sum_hash, list(range(7)), 0, 3)) == 3


class TestBuildMerkleRoot:
    """Tests for build_merkle_root()."""

    def test_concrete_sum_root(self):
        """depth 2, arity 2, zero 0, sum over [1, 2, 3] is 6."""
        assert build_merkle_root(sum_hash, 2, 0, 2, [1, 2, 3]) == 6

    def test_empty_leaves(self):
        """No leaves gives the empty root."""
        _, empty_root = compute_zeroes(tuple_hash, 3, 0, 2)

        assert build_merkle_root(tuple_hash, 3, 0, 2, []) == empty_root

    @pytest.mark.parametrize("depth,arity,count", [(3, 2, 5), (2, 3, 9), (3, 4, 17)])
    def test_matches_naive_recursion(self, depth, arity, count):
        """Level-wise padding agrees with full recursive recomputation."""
        leaves = list(range(1, count + 1))

        assert build_merkle_root(tuple_hash, depth, 0, arity, leaves) == naive_root(
            tuple_hash, depth, 0, arity, leaves
        )

    def test_too_many_leaves_raises(self):
        """More leaves than slots is rejected."""
        with pytest.raises(CapacityExceededException):
            build_merkle_root(sum_hash, 1, 0, 2, [1, 2, 3])


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
