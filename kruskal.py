"""Kruskal's greedy minimum spanning forest."""
from dataclasses import dataclass
from typing import Tuple

from dsu import DSU
from graph_utils import Edge, Graph


@dataclass(frozen=True)
class Forest:
    """Edges of a minimum spanning forest in the order they were accepted, plus their total weight."""
    num_nodes: int
    edges: Tuple[Edge, ...]
    weight: float

    @property
    def size(self) -> int:
        return len(self.edges)

    @property
    def num_components(self) -> int:
        return self.num_nodes - len(self.edges)

    @property
    def is_spanning_tree(self) -> bool:
        return self.num_nodes >= 1 and len(self.edges) == self.num_nodes - 1


def kruskal_mst(graph: Graph, check: bool = False, verbose: bool = False) -> Forest:
    """Build the minimum spanning forest of ``graph``.

    Edges are scanned by increasing weight; ``sorted`` is stable, so edges of
    equal weight are considered in input order and the result is deterministic.
    With ``check=True`` the optimality conditions are verified afterwards and
    an ``MSTCheckError`` is raised if any of them fails.
    """
    num_nodes = graph.num_nodes
    sorted_edges = sorted(graph.edges, key=lambda e: e.weight)

    dsu = DSU(num_nodes)
    mst = []
    total_weight = 0.0
    for e in sorted_edges:
        if len(mst) >= num_nodes - 1:
            break
        v = e.either()
        w = e.other(v)
        # v-w does not close a cycle
        if dsu.find(v) != dsu.find(w):
            dsu.union(v, w)
            mst.append(e)
            total_weight += e.weight
            if verbose:
                print(f"[kruskal] Edge {len(mst)}: ({v}, {w}) = {e.weight:.6f}, "
                      f"total = {total_weight:.6f}", flush=True)

    forest = Forest(num_nodes, tuple(mst), total_weight)
    if verbose:
        print(f"[kruskal] Complete: {forest.size} edges, {forest.num_components} component(s), "
              f"weight {total_weight:.6f}", flush=True)

    if check:
        from validate_mst import MSTCheckError, check_mst
        result = check_mst(graph, forest)
        if not result:
            raise MSTCheckError(result)
    return forest
