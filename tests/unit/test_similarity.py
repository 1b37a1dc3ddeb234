"""Tests for the cosine similarity kernel."""

import pytest

from nlaction import cosine_similarity


class TestCosineSimilarity:
    """Test cosine_similarity bounds and edge cases."""

    def test_identical_vectors(self) -> None:
        v = [0.3, -1.2, 4.0, 0.0]
        assert cosine_similarity(v, v) == pytest.approx(1.0)

    def test_opposite_vectors(self) -> None:
        v = [1.0, 2.0, 3.0]
        assert cosine_similarity(v, [-x for x in v]) == pytest.approx(-1.0)

    def test_orthogonal_vectors(self) -> None:
        assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == pytest.approx(0.0)

    def test_symmetric(self) -> None:
        a = [1.0, 2.0, 0.5]
        b = [0.2, -1.0, 3.0]
        assert cosine_similarity(a, b) == pytest.approx(cosine_similarity(b, a))

    def test_scale_invariant(self) -> None:
        a = [1.0, 2.0, 3.0]
        assert cosine_similarity(a, [10 * x for x in a]) == pytest.approx(1.0)

    def test_zero_vector_does_not_divide_by_zero(self) -> None:
        assert cosine_similarity([0.0, 0.0], [1.0, 1.0]) == 0.0
        assert cosine_similarity([0.0, 0.0], [0.0, 0.0]) == 0.0

    def test_length_mismatch_raises(self) -> None:
        with pytest.raises(ValueError):
            cosine_similarity([1.0, 2.0], [1.0])
