"""Summary statistics of forest weights across a batch of graphs."""
from dataclasses import dataclass
from typing import Iterable, Tuple, Union

from graph_utils import Graph
from kruskal import Forest


class EmptyBatchError(ValueError):
    """Mean and median are undefined for a batch without results."""


@dataclass(frozen=True)
class BatchStatistics:
    count: int
    total: float
    mean: float
    median: float
    minimum: float
    maximum: float
    weights: Tuple[float, ...]

    def as_dict(self):
        return {
            'count': self.count,
            'total': self.total,
            'mean': self.mean,
            'median': self.median,
            'min': self.minimum,
            'max': self.maximum,
            'weights': list(self.weights),
        }


def summarize_weights(weights: Iterable[float]) -> BatchStatistics:
    collected = []
    total = 0.0
    min_weight = float('inf')
    max_weight = float('-inf')
    for w in weights:
        total += w
        min_weight = min(min_weight, w)
        max_weight = max(max_weight, w)
        collected.append(w)

    n = len(collected)
    if n == 0:
        raise EmptyBatchError("statistics are undefined for an empty batch")

    ordered = sorted(collected)
    if n % 2 == 0:
        median = (ordered[n // 2 - 1] + ordered[n // 2]) / 2.0
    else:
        median = ordered[n // 2]

    return BatchStatistics(n, total, total / n, median, min_weight, max_weight, tuple(collected))


def aggregate(results: Iterable[Union[Forest, Tuple[Graph, Forest]]]) -> BatchStatistics:
    """Statistics over forests given directly or as (graph, forest) pairs."""
    def weights():
        for item in results:
            forest = item[1] if isinstance(item, tuple) else item
            yield forest.weight
    return summarize_weights(weights())
