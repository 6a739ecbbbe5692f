#!/usr/bin/env python3
"""Convert raw edge lists into weighted graph files readable by load_graph.

Usage examples:
  python prepare_dataset.py HU_edges.csv graphs/hu.txt --weight hash
  python prepare_dataset.py snap.txt graphs/out.txt --method snowball --target-nodes 2000 --keep-largest-cc

Input is either a SNAP whitespace edge list ('#' comments) or a gemsec-style
CSV with a 'node_1,node_2' header. Sampling methods: all, node, snowball.
Weight methods: random, hash.
"""
import argparse
import hashlib
import random
import sys
from collections import deque
from typing import List, Set, Tuple

import networkx as nx

from graph_utils import Edge, GraphLoadError, save_graph_file


def read_edge_list(path: str) -> Tuple[List[Tuple[int, int]], Set[int]]:
    edges = []
    nodes = set()
    with open(path, 'r', encoding='utf-8') as f:
        for lineno, line in enumerate(f, 1):
            line = line.strip()
            if not line or line.startswith('#'):
                continue
            parts = line.replace(',', ' ').split()
            if len(parts) < 2:
                raise GraphLoadError(f"{path}:{lineno}: expected two node ids")
            try:
                a = int(parts[0]); b = int(parts[1])
            except ValueError:
                if not edges:
                    continue  # CSV header
                raise GraphLoadError(f"{path}:{lineno}: bad node ids {parts[0]!r} {parts[1]!r}")
            if a == b:
                continue
            edges.append((a, b))
            nodes.add(a); nodes.add(b)
    return edges, nodes


def node_induced_sample(edges, nodes, target_n, seed):
    rng = random.Random(seed)
    node_list = sorted(nodes)
    if target_n >= len(node_list):
        chosen = set(node_list)
    else:
        chosen = set(rng.sample(node_list, target_n))
    return [(u, v) for (u, v) in edges if u in chosen and v in chosen]


def snowball_sample(edges, nodes, target_n, seed):
    if not nodes:
        return []
    G = nx.Graph()
    G.add_edges_from(edges)
    rng = random.Random(seed)
    start = rng.choice(sorted(nodes))
    q = deque([start])
    chosen = {start}
    while q and len(chosen) < target_n:
        x = q.popleft()
        for nbr in sorted(G.neighbors(x)):
            if nbr not in chosen:
                chosen.add(nbr)
                q.append(nbr)
                if len(chosen) >= target_n:
                    break
    return [(u, v) for (u, v) in edges if u in chosen and v in chosen]


def keep_largest_cc(edges):
    G = nx.Graph()
    G.add_edges_from(edges)
    if G.number_of_nodes() == 0:
        return []
    chosen = max(nx.connected_components(G), key=len)
    return [(u, v) for (u, v) in edges if u in chosen]


def assign_weights(edges, weight_method, seed) -> List[Tuple[int, int, float]]:
    if weight_method == 'random':
        rng = random.Random(seed)
        return [(u, v, round(rng.uniform(1.0, 100.0), 6)) for (u, v) in edges]
    if weight_method == 'hash':
        out = []
        for u, v in edges:
            # order-independent so both directions of an edge get the same weight
            a, b = min(u, v), max(u, v)
            h = hashlib.md5(f"{a}-{b}".encode('utf-8')).hexdigest()
            val = int(h[:8], 16) / 0xFFFFFFFF
            out.append((u, v, round(1.0 + val * 99.0, 6)))
        return out
    raise ValueError(f"Unknown weight method: {weight_method}")


def remap(weighted_edges) -> Tuple[int, List[Edge]]:
    """Relabel node ids to 0..n-1 in first-seen order."""
    id_map = {}
    remapped = []
    for u, v, w in weighted_edges:
        for x in (u, v):
            if x not in id_map:
                id_map[x] = len(id_map)
        remapped.append(Edge(id_map[u], id_map[v], w))
    return len(id_map), remapped


def main(argv=None):
    p = argparse.ArgumentParser(description='Convert an edge list to the weighted graph file format')
    p.add_argument('input', help='SNAP edge list or gemsec CSV')
    p.add_argument('output', help='Output graph file path')
    p.add_argument('--method', choices=['all', 'node', 'snowball'], default='all')
    p.add_argument('--target-nodes', type=int, default=5000)
    p.add_argument('--weight', choices=['random', 'hash'], default='random')
    p.add_argument('--seed', type=int, default=42)
    p.add_argument('--keep-largest-cc', action='store_true')
    args = p.parse_args(argv)

    try:
        edges, nodes = read_edge_list(args.input)
    except (OSError, GraphLoadError) as e:
        print(f"[prepare] ERROR: {e}", file=sys.stderr)
        return 1
    print(f"[prepare] Read {len(edges)} edges and {len(nodes)} unique node ids from {args.input}")

    if args.method == 'node':
        edges = node_induced_sample(edges, nodes, args.target_nodes, args.seed)
    elif args.method == 'snowball':
        edges = snowball_sample(edges, nodes, args.target_nodes, args.seed)
    if args.method != 'all':
        print(f"[prepare] Sampled {len(edges)} edges")

    if args.keep_largest_cc:
        edges = keep_largest_cc(edges)
        print(f"[prepare] After keeping LCC: {len(edges)} edges")

    n, remapped = remap(assign_weights(edges, args.weight, args.seed))
    save_graph_file(n, remapped, args.output)
    print(f"[prepare] Wrote {args.output} with n={n}, m={len(remapped)}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
