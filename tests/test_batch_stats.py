import pytest

from batch_stats import EmptyBatchError, aggregate, summarize_weights
from graph_utils import Graph
from kruskal import kruskal_mst


def test_three_weights():
    stats = summarize_weights([5.0, 2.0, 9.0])
    assert stats.count == 3
    assert stats.total == 16.0
    assert stats.mean == pytest.approx(16.0 / 3)
    assert stats.median == 5.0
    assert stats.minimum == 2.0
    assert stats.maximum == 9.0
    assert stats.weights == (5.0, 2.0, 9.0)


def test_even_count_median_averages_middle_pair():
    stats = summarize_weights([4.0, 1.0, 10.0, 3.0])
    assert stats.median == 3.5


def test_single_weight():
    stats = summarize_weights([-7.5])
    assert stats.mean == stats.median == stats.minimum == stats.maximum == -7.5


def test_empty_batch_is_an_error():
    with pytest.raises(EmptyBatchError):
        summarize_weights([])
    with pytest.raises(ValueError):
        aggregate([])


def test_aggregate_accepts_pairs_and_forests():
    g1 = Graph.from_tuples(3, [(0, 1, 2.0), (1, 2, 3.0), (0, 2, 4.0)])
    g2 = Graph.from_tuples(4, [(0, 1, 1.0), (2, 3, 1.0)])
    f1, f2 = kruskal_mst(g1), kruskal_mst(g2)
    assert aggregate([(g1, f1), (g2, f2)]) == aggregate([f1, f2])
    stats = aggregate([f1, f2])
    assert stats.median == 3.5
    assert stats.as_dict()['min'] == 2.0
