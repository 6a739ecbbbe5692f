"""Weighted undirected multigraph types plus loading, saving and generation helpers."""
import os
import random
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, TextIO, Tuple, Union

import networkx as nx


class GraphLoadError(ValueError):
    """Raised when a graph source is missing or does not describe a valid graph."""


@dataclass(frozen=True, eq=False)
class Edge:
    """Undirected weighted edge.

    Compared and hashed by identity: a multigraph may hold several edges with
    the same endpoints and weight, and they must stay distinguishable.
    """
    v: int
    w: int
    weight: float

    def __post_init__(self):
        if self.v == self.w:
            raise ValueError(f"self loop on vertex {self.v} is not a valid edge")

    def either(self) -> int:
        return self.v

    def other(self, vertex: int) -> int:
        if vertex == self.v:
            return self.w
        if vertex == self.w:
            return self.v
        raise ValueError(f"vertex {vertex} is not an endpoint of {self}")

    def as_tuple(self) -> Tuple[int, int, float]:
        return (self.v, self.w, self.weight)

    def __str__(self):
        return f"{self.v}-{self.w} {self.weight:.5f}"


@dataclass(frozen=True)
class Graph:
    """Immutable edge-weighted undirected multigraph on vertices 0..num_nodes-1."""
    num_nodes: int
    edges: Tuple[Edge, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if self.num_nodes < 0:
            raise ValueError(f"number of vertices must be non-negative, got {self.num_nodes}")
        object.__setattr__(self, 'edges', tuple(self.edges))
        for e in self.edges:
            for x in (e.v, e.w):
                if not 0 <= x < self.num_nodes:
                    raise ValueError(f"edge {e} has endpoint {x} outside [0, {self.num_nodes})")

    @classmethod
    def from_tuples(cls, num_nodes: int, edges: Iterable[Tuple[int, int, float]]) -> 'Graph':
        return cls(num_nodes, tuple(Edge(int(v), int(w), float(wt)) for v, w, wt in edges))

    @property
    def num_edges(self) -> int:
        return len(self.edges)

    def to_networkx(self) -> nx.MultiGraph:
        """Return a MultiGraph holding every vertex and every (parallel) edge."""
        G = nx.MultiGraph()
        G.add_nodes_from(range(self.num_nodes))
        for e in self.edges:
            G.add_edge(e.v, e.w, weight=e.weight)
        return G


def _tokens(fh: TextIO) -> List[str]:
    tokens = []
    for line in fh:
        line = line.split('#', 1)[0].strip()
        if line:
            tokens.extend(line.split())
    return tokens


def parse_graph(fh: TextIO) -> Graph:
    """Parse the text format: V, E, then E triples ``v w weight``.

    Tokens are whitespace separated; anything after ``#`` on a line is ignored.
    """
    tokens = _tokens(fh)
    if len(tokens) < 2:
        raise GraphLoadError("missing vertex and edge counts")
    try:
        num_nodes = int(tokens[0])
        num_edges = int(tokens[1])
    except ValueError as exc:
        raise GraphLoadError(f"malformed vertex/edge counts: {tokens[0]!r} {tokens[1]!r}") from exc
    if num_nodes < 0:
        raise GraphLoadError(f"number of vertices must be non-negative, got {num_nodes}")
    if num_edges < 0:
        raise GraphLoadError(f"number of edges must be non-negative, got {num_edges}")

    body = tokens[2:]
    if len(body) != 3 * num_edges:
        raise GraphLoadError(
            f"declared {num_edges} edges but found {len(body) // 3} "
            f"({len(body)} tokens after the header)")

    edges = []
    for i in range(num_edges):
        v_tok, w_tok, wt_tok = body[3*i:3*i + 3]
        try:
            v = int(v_tok)
            w = int(w_tok)
            weight = float(wt_tok)
        except ValueError as exc:
            raise GraphLoadError(f"edge {i}: malformed triple {v_tok} {w_tok} {wt_tok}") from exc
        for x in (v, w):
            if not 0 <= x < num_nodes:
                raise GraphLoadError(f"edge {i}: vertex {x} is not between 0 and {num_nodes - 1}")
        if v == w:
            raise GraphLoadError(f"edge {i}: self loop on vertex {v}")
        edges.append(Edge(v, w, weight))
    return Graph(num_nodes, tuple(edges))


def load_graph(source: Union[str, os.PathLike, TextIO]) -> Graph:
    """Load a graph from a path or an open text stream."""
    if hasattr(source, 'read'):
        return parse_graph(source)
    try:
        with open(source, 'r') as fh:
            return parse_graph(fh)
    except OSError as exc:
        raise GraphLoadError(f"cannot read graph {source}: {exc}") from exc


def save_graph_file(num_nodes: int, edges: Sequence[Edge], filename: Union[str, os.PathLike]):
    """Save edges in the text format read by load_graph."""
    with open(filename, 'w') as f:
        f.write(f"{num_nodes} {len(edges)}\n")
        for e in edges:
            f.write(f"{e.v} {e.w} {e.weight}\n")


def read_source_list(path: Union[str, os.PathLike]) -> List[str]:
    """Read graph locations, one per line; relative entries resolve next to the list file."""
    base = os.path.dirname(os.path.abspath(path))
    sources = []
    with open(path, 'r') as fh:
        for line in fh:
            line = line.strip()
            if not line or line.startswith('#'):
                continue
            sources.append(line if os.path.isabs(line) else os.path.join(base, line))
    return sources


def generate_graph(n: int, extra_edges: Optional[int] = None, seed: int = 42,
                   components: int = 1) -> Graph:
    """Generate a random weighted graph with exactly ``components`` connected components.

    Each component starts as a random labeled tree (so it is connected) and
    receives a share of ``extra_edges`` random chords. Weights are uniform in
    [1, 100).
    """
    if components < 1 or (n > 0 and components > n):
        raise ValueError(f"cannot split {n} nodes into {components} components")
    if n == 0:
        return Graph(0)
    rng = random.Random(seed)
    if extra_edges is None:
        extra_edges = max(0, n // 2)

    # contiguous vertex blocks, one per component
    per, rest = divmod(n, components)
    blocks = []
    start = 0
    for i in range(components):
        cnt = per + (1 if i < rest else 0)
        blocks.append(range(start, start + cnt))
        start += cnt

    G = nx.Graph()
    G.add_nodes_from(range(n))
    for i, block in enumerate(blocks):
        tree = nx.random_labeled_tree(len(block), seed=seed + i)
        G.add_edges_from((block[u], block[v]) for u, v in tree.edges())
    for _ in range(extra_edges):
        block = rng.choice(blocks)
        u = rng.choice(block)
        v = rng.choice(block)
        if u == v or G.has_edge(u, v):
            continue
        G.add_edge(u, v)

    edges = tuple(Edge(int(u), int(v), rng.uniform(1.0, 100.0)) for u, v in G.edges())
    print(f"[graph_utils] Generated graph: {n} nodes, {len(edges)} edges, "
          f"{components} component(s)", flush=True)
    return Graph(n, edges)
