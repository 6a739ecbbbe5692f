#!/usr/bin/env python3
"""Validate minimum spanning forests against the MST optimality conditions.

The full check costs O(F * (E + V lg* V)) for a forest of F edges, so it is
meant for tests and offline validation rather than every build.
"""
import argparse
import sys
from dataclasses import dataclass
from typing import Optional, Sequence

import networkx as nx

from dsu import DSU
from graph_utils import Edge, Graph, GraphLoadError, load_graph
from kruskal import Forest, kruskal_mst

FLOATING_POINT_EPSILON = 1.0e-12


@dataclass(frozen=True)
class MSTCheck:
    """Outcome of an optimality check; ``condition`` names the first failed check."""
    ok: bool
    condition: Optional[str] = None
    message: str = ""
    edge: Optional[Edge] = None
    witness: Optional[Edge] = None

    def __bool__(self):
        return self.ok


PASSED = MSTCheck(True)


class MSTCheckError(AssertionError):
    def __init__(self, result: MSTCheck):
        super().__init__(f"{result.condition}: {result.message}")
        self.result = result

    def __reduce__(self):
        return (MSTCheckError, (self.result,))


def check_weight(forest: Forest, tolerance: float = FLOATING_POINT_EPSILON) -> MSTCheck:
    total = 0.0
    for e in forest.edges:
        total += e.weight
    if abs(total - forest.weight) > tolerance:
        return MSTCheck(False, 'weight',
                        f"Weight of edges does not equal weight(): {total:f} vs. {forest.weight:f}")
    return PASSED


def _forest_partition(forest: Forest) -> DSU:
    dsu = DSU(forest.num_nodes)
    for e in forest.edges:
        dsu.union(e.v, e.w)
    return dsu


def check_acyclic(forest: Forest) -> MSTCheck:
    dsu = DSU(forest.num_nodes)
    for e in forest.edges:
        v = e.either()
        w = e.other(v)
        if dsu.find(v) == dsu.find(w):
            return MSTCheck(False, 'acyclic', f"Not a forest: edge {e} closes a cycle", edge=e)
        dsu.union(v, w)
    return PASSED


def _edge_key(e: Edge):
    return (min(e.v, e.w), max(e.v, e.w), e.weight)


def check_spanning(graph: Graph, forest: Forest) -> MSTCheck:
    """The forest must be made of graph edges and have the graph's component partition.

    A forest edge counts as a graph edge when it is one of ``graph.edges``, or,
    for forests read back from a file, when a graph edge has the same
    endpoints and weight.
    """
    if forest.num_nodes != graph.num_nodes:
        return MSTCheck(False, 'spanning',
                        f"Forest has {forest.num_nodes} vertices, graph has {graph.num_nodes}")

    graph_edges = set(graph.edges)
    graph_keys = {_edge_key(e) for e in graph.edges}
    for e in forest.edges:
        if e not in graph_edges and _edge_key(e) not in graph_keys:
            return MSTCheck(False, 'spanning', f"Not a spanning forest: {e} is not an edge of the graph",
                            edge=e)

    # forest edges are graph edges, so the forest partition is no coarser than
    # the graph's; every graph edge inside one forest component makes it no finer
    dsu = _forest_partition(forest)
    for e in graph.edges:
        if dsu.find(e.v) != dsu.find(e.w):
            return MSTCheck(False, 'spanning',
                            f"Not a spanning forest: {e} joins components the forest never connects",
                            edge=e)
    return PASSED


def cut_partition(num_nodes: int, forest_edges: Sequence[Edge], excluded: Edge) -> DSU:
    """Components of the forest with ``excluded`` removed (matched by identity)."""
    dsu = DSU(num_nodes)
    for f in forest_edges:
        if f is not excluded:
            dsu.union(f.v, f.w)
    return dsu


def find_cut_violation(graph: Graph, forest_edges: Sequence[Edge], e: Edge) -> Optional[Edge]:
    """Return a graph edge cheaper than ``e`` crossing the cut ``e`` induces, if any."""
    dsu = cut_partition(graph.num_nodes, forest_edges, e)
    for f in graph.edges:
        if f is e:
            continue
        if dsu.find(f.v) != dsu.find(f.w) and f.weight < e.weight:
            return f
    return None


def check_cut_optimality(graph: Graph, forest: Forest) -> MSTCheck:
    for e in forest.edges:
        f = find_cut_violation(graph, forest.edges, e)
        if f is not None:
            return MSTCheck(False, 'cut_optimality',
                            f"Edge {f} violates cut optimality conditions for {e}",
                            edge=e, witness=f)
    return PASSED


def check_mst(graph: Graph, forest: Forest, tolerance: float = FLOATING_POINT_EPSILON) -> MSTCheck:
    """Run the weight, acyclicity, spanning and cut optimality checks in order."""
    result = check_weight(forest, tolerance)
    if not result:
        return result
    result = check_acyclic(forest)
    if not result:
        return result
    result = check_spanning(graph, forest)
    if not result:
        return result
    return check_cut_optimality(graph, forest)


def networkx_forest_weight(graph: Graph) -> float:
    """Reference weight from networkx, kept independent of the DSU code."""
    msf = nx.minimum_spanning_tree(graph.to_networkx(), algorithm='kruskal')
    return sum(data['weight'] for _, _, data in msf.edges(data=True))


def load_forest(path: str) -> Forest:
    """Load a forest stored in the graph text format."""
    g = load_graph(path)
    return Forest(g.num_nodes, g.edges, sum(e.weight for e in g.edges))


def main(argv=None):
    p = argparse.ArgumentParser(description="Validate a minimum spanning forest against the optimality conditions")
    p.add_argument("graph", help="Graph file (V E, then E lines 'v w weight')")
    p.add_argument("forest", nargs="?", help="Forest file in the same format (default: build with Kruskal)")
    p.add_argument("--tolerance", type=float, default=FLOATING_POINT_EPSILON,
                   help="Absolute tolerance for weight comparisons")
    args = p.parse_args(argv)

    try:
        graph = load_graph(args.graph)
        forest = load_forest(args.forest) if args.forest else kruskal_mst(graph)
    except GraphLoadError as e:
        print(f"[validate] ERROR: {e}", file=sys.stderr)
        return 1

    print(f"Graph: {args.graph} nodes={graph.num_nodes} edges={graph.num_edges}")
    print(f"Forest: weight={forest.weight:.6f} edges={forest.size} components={forest.num_components}")

    failed = False
    result = check_mst(graph, forest, args.tolerance)
    if result:
        print("Optimality conditions hold.")
    else:
        print(f"[validate] {result.condition} check failed: {result.message}", file=sys.stderr)
        failed = True

    opt_weight = networkx_forest_weight(graph)
    print(f"Reference (networkx): weight={opt_weight:.6f}")
    if abs(opt_weight - forest.weight) <= max(args.tolerance, 1e-9 * max(1.0, abs(opt_weight))):
        print("Forest weight matches reference.")
    else:
        print("Forest weight DOES NOT match reference.", file=sys.stderr)
        failed = True
    return 1 if failed else 0


if __name__ == '__main__':
    sys.exit(main())
