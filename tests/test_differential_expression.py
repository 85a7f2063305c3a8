"""
Tests for differential expression selection
"""

import warnings

import pytest

from ms_abundance_sim.differential_expression import (
    DifferentialExpressionPlan,
    count_differentially_expressed,
    select_differentially_expressed,
)
from ms_abundance_sim.sampling import RandomStream


class TestSelection:
    """Test which proteins get selected"""

    @pytest.mark.parametrize(
        "num_proteins,pct,expected",
        [(200, 3, 6), (100, 3, 3), (10, 3, 0), (33, 10, 3), (7, 100, 7), (50, 0, 0), (0, 50, 0)],
    )
    def test_count_is_floor(self, num_proteins, pct, expected):
        assert count_differentially_expressed(num_proteins, pct) == expected

    def test_plan_size_and_range(self, rng):
        plan = select_differentially_expressed(200, 3.0, rng)
        assert plan.num_selected == 6
        assert plan.num_proteins == 200
        assert all(0 <= idx < 200 for idx in plan.selected_indices)

    def test_sign_per_selected_index(self, rng):
        plan = select_differentially_expressed(500, 20.0, rng)
        assert set(plan.sign_by_index) == set(plan.selected_indices)
        assert set(plan.sign_by_index.values()) <= {1, -1}

    def test_all_selected_at_100_percent(self, rng):
        plan = select_differentially_expressed(12, 100.0, rng)
        assert plan.selected_indices == frozenset(range(12))

    def test_none_selected_at_zero_percent(self, rng):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            plan = select_differentially_expressed(50, 0.0, rng)
        assert plan.num_selected == 0
        assert plan.sign_by_index == {}

    def test_warns_when_percentage_rounds_to_zero(self, rng):
        with pytest.warns(UserWarning, match="rounds down to 0"):
            plan = select_differentially_expressed(10, 3.0, rng)
        assert plan.num_selected == 0

    def test_deterministic_with_seed(self):
        a = select_differentially_expressed(300, 5.0, RandomStream(seed=11))
        b = select_differentially_expressed(300, 5.0, RandomStream(seed=11))
        assert a.selected_indices == b.selected_indices
        assert a.sign_by_index == b.sign_by_index

    def test_selection_is_spread_over_proteins(self):
        """Different seeds choose different proteins"""
        plans = [select_differentially_expressed(1000, 1.0, RandomStream(seed=s)) for s in range(5)]
        assert len({p.selected_indices for p in plans}) > 1

    @pytest.mark.parametrize("pct", [-1.0, 100.5])
    def test_invalid_percentage_raises(self, pct, rng):
        with pytest.raises(ValueError):
            select_differentially_expressed(10, pct, rng)

    def test_negative_protein_count_raises(self, rng):
        with pytest.raises(ValueError):
            select_differentially_expressed(-1, 5.0, rng)


class TestPlan:
    """Test the plan object"""

    def test_is_selected(self):
        plan = DifferentialExpressionPlan(num_proteins=5, selected_indices=frozenset({1, 3}),
                                          sign_by_index={1: 1, 3: -1})
        assert plan.is_selected(1)
        assert plan.is_selected(3)
        assert not plan.is_selected(0)
        assert plan.num_selected == 2

    def test_empty_plan(self):
        plan = DifferentialExpressionPlan(num_proteins=3)
        assert plan.num_selected == 0
        assert not plan.is_selected(0)
