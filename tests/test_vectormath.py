"""
tests for the distance math.

covers:
- cosine similarity / distance bounds and edge cases
- average distance over all pairs
- both score scales
- pair records
"""

import math
from itertools import combinations

import numpy as np
import pytest

from faraway.vectormath import (
    PairDistance,
    ScoreScale,
    average_distance,
    cosine_distance,
    cosine_similarity,
    pair_distances,
    scale_score,
)


class TestCosine:
    """tests for cosine_similarity and cosine_distance."""

    def test_identical_vectors_have_zero_distance(self):
        v = [0.3, 1.2, -0.7, 4.0]
        assert cosine_distance(v, v) == pytest.approx(0.0, abs=1e-12)

    def test_orthogonal_vectors(self):
        assert cosine_similarity([1, 0], [0, 1]) == pytest.approx(0.0)
        assert cosine_distance([1, 0], [0, 1]) == pytest.approx(1.0)

    def test_opposite_vectors_have_distance_two(self):
        assert cosine_distance([1, 2, 3], [-1, -2, -3]) == pytest.approx(2.0)

    def test_distance_bounds_on_random_vectors(self):
        rng = np.random.default_rng(7)
        for _ in range(200):
            a = rng.normal(size=12)
            b = rng.normal(size=12)
            d = cosine_distance(a, b)
            assert 0.0 <= d <= 2.0

    def test_overshoot_is_clamped(self):
        # scaled copies can push similarity a hair past 1.0
        v = np.array([0.1, 0.2, 0.3]) * 1e-3
        d = cosine_distance(v, v * 3.0)
        assert 0.0 <= d <= 1e-12

    def test_zero_vector_gives_nan(self):
        assert math.isnan(cosine_similarity([0, 0, 0], [1, 2, 3]))
        assert math.isnan(cosine_distance([0, 0, 0], [1, 2, 3]))

    def test_length_mismatch_raises(self):
        with pytest.raises(ValueError):
            cosine_similarity([1, 2], [1, 2, 3])


class TestAverageDistance:
    """tests for average_distance."""

    def test_fewer_than_two_vectors(self):
        assert average_distance([]) == 0.0
        assert average_distance([[1.0, 2.0]]) == 0.0

    def test_matches_mean_over_all_pairs(self):
        rng = np.random.default_rng(3)
        X = rng.random((7, 10))
        expected = [cosine_distance(X[i], X[j]) for i, j in combinations(range(7), 2)]
        assert len(expected) == 21
        assert average_distance(X) == pytest.approx(sum(expected) / 21)

    def test_two_vectors(self):
        assert average_distance([[1, 0], [0, 1]]) == pytest.approx(1.0)

    def test_zero_vector_poisons_average(self):
        assert math.isnan(average_distance([[0, 0], [1, 0], [0, 1]]))


class TestScoreScale:
    """tests for the sigmoid and linear scales."""

    def test_sigmoid_center_maps_to_fifty(self):
        assert scale_score(0.63) == pytest.approx(50.0)

    def test_sigmoid_default_constants(self):
        scale = ScoreScale()
        assert scale.policy == "sigmoid"
        assert scale.center == 0.63
        assert scale.steepness == 10.5
        expected = 100 / (1 + math.exp(-10.5 * (0.8 - 0.63)))
        assert scale(0.8) == pytest.approx(expected)

    def test_sigmoid_monotonic_and_bounded(self):
        scale = ScoreScale()
        values = [scale(d) for d in np.linspace(0.0, 2.0, 401)]
        assert all(b >= a for a, b in zip(values, values[1:]))
        assert all(0.0 <= v <= 100.0 for v in values)

    def test_sigmoid_extreme_inputs_do_not_overflow(self):
        scale = ScoreScale()
        assert scale(1e6) == pytest.approx(100.0)
        assert scale(-1e6) == pytest.approx(0.0)

    def test_linear_scale(self):
        scale = ScoreScale(policy="linear")
        assert scale(0.4) == pytest.approx(0.0)
        assert scale(0.75) == pytest.approx(50.0)
        assert scale(1.1) == pytest.approx(100.0)

    def test_linear_clamps(self):
        scale = ScoreScale(policy="linear")
        assert scale(0.0) == 0.0
        assert scale(2.0) == 100.0

    def test_linear_monotonic(self):
        scale = ScoreScale(policy="linear")
        values = [scale(d) for d in np.linspace(0.0, 2.0, 401)]
        assert all(b >= a for a, b in zip(values, values[1:]))

    def test_nan_passes_through(self):
        assert math.isnan(ScoreScale()(math.nan))
        assert math.isnan(ScoreScale(policy="linear")(math.nan))

    def test_unknown_policy_rejected(self):
        with pytest.raises(ValueError):
            ScoreScale(policy="cubic")

    def test_non_positive_parameters_rejected(self):
        with pytest.raises(ValueError):
            ScoreScale(steepness=0)
        with pytest.raises(ValueError):
            ScoreScale(policy="linear", span=-1)


class TestPairDistances:
    """tests for pair_distances."""

    def test_one_record_per_pair_in_order(self):
        words = ["a", "b", "c", "d"]
        X = np.eye(4)
        pairs = pair_distances(words, X)

        assert [(p.i, p.j) for p in pairs] == list(combinations(range(4), 2))
        assert all(p.distance == pytest.approx(1.0) for p in pairs)
        assert pairs[0].word1 == "a" and pairs[0].word2 == "b"

    def test_scaled_score_uses_scale(self):
        scale = ScoreScale(policy="linear")
        pairs = pair_distances(["x", "y"], [[1, 0], [0, 1]], scale)
        assert pairs[0].scaled_score == pytest.approx(scale(1.0))

    def test_to_dict_keys(self):
        p = PairDistance("a", "b", 0, 1, 0.5, 40.0)
        assert p.to_dict() == {
            "word1": "a", "word2": "b", "i": 0, "j": 1,
            "distance": 0.5, "scaledScore": 40.0,
        }

    def test_word_count_mismatch(self):
        with pytest.raises(ValueError):
            pair_distances(["a"], [[1, 0], [0, 1]])
