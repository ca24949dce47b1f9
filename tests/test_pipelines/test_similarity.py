import numpy as np
import pytest

from eztax_rag.pipelines import cosine_similarities, cosine_similarity


class TestCosineSimilarity:
    def test_identical_vectors(self) -> None:
        assert cosine_similarity([0.3, 0.4, 0.5], [0.3, 0.4, 0.5]) == pytest.approx(1.0)

    def test_orthogonal_vectors(self) -> None:
        assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == pytest.approx(0.0)

    def test_opposite_vectors(self) -> None:
        assert cosine_similarity([1.0, 2.0], [-1.0, -2.0]) == pytest.approx(-1.0)

    def test_is_symmetric(self) -> None:
        a, b = [0.2, 0.7, 0.1], [0.9, 0.1, 0.4]
        assert cosine_similarity(a, b) == pytest.approx(cosine_similarity(b, a))

    def test_zero_vector_scores_zero(self) -> None:
        assert cosine_similarity([0.0, 0.0], [1.0, 0.0]) == 0.0
        assert cosine_similarity([0.0, 0.0], [0.0, 0.0]) == 0.0

    def test_dimension_mismatch_raises(self) -> None:
        with pytest.raises(ValueError):
            cosine_similarity([1.0, 0.0], [1.0, 0.0, 0.0])


class TestCosineSimilarities:
    def test_scores_every_row(self) -> None:
        matrix = np.array([[1.0, 0.0], [0.0, 1.0], [0.6, 0.8], [0.0, 0.0]])

        scores = cosine_similarities([1.0, 0.0], matrix)

        assert scores.tolist() == pytest.approx([1.0, 0.0, 0.6, 0.0])

    def test_matches_pairwise_function(self) -> None:
        matrix = np.array([[0.2, 0.7, 0.1], [0.9, 0.1, 0.4]])
        query = [0.5, 0.5, 0.5]

        scores = cosine_similarities(query, matrix)

        for row, score in zip(matrix, scores):
            assert score == pytest.approx(cosine_similarity(query, row))

    def test_empty_matrix(self) -> None:
        assert cosine_similarities([1.0, 0.0], np.zeros((0, 0))).size == 0

    def test_dimension_mismatch_raises(self) -> None:
        with pytest.raises(ValueError):
            cosine_similarities([1.0, 0.0, 0.0], np.array([[1.0, 0.0]]))

    def test_rows_without_components_raise(self) -> None:
        with pytest.raises(ValueError):
            cosine_similarities([1.0, 0.0], np.zeros((2, 0)))
