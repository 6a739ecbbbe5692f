#!/usr/bin/env python3
"""Batch driver: load graphs, build their minimum spanning forests, report per-graph edges and combined statistics."""
import argparse
import json
import os
import sys
from dataclasses import dataclass, field
from typing import Callable, List, Sequence, TextIO

from batch_stats import BatchStatistics, EmptyBatchError, aggregate
from graph_utils import Graph, GraphLoadError, generate_graph, load_graph, read_source_list, save_graph_file
from kruskal import Forest, kruskal_mst
from metrics import Metrics
from validate_mst import MSTCheckError, check_mst

DEFAULT_NODES = 40
DEFAULT_SEED = 42


@dataclass
class GraphResult:
    source: str
    graph: Graph
    forest: Forest


@dataclass
class BatchRun:
    results: List[GraphResult]
    statistics: BatchStatistics
    metrics: Metrics = field(default_factory=Metrics)


def describe_forest(forest: Forest) -> str:
    if forest.is_spanning_tree:
        return f"spanning tree of {forest.size} edges"
    return f"{forest.size} forest edges over {forest.num_components} components"


def build_forest(source, graph: Graph, verify: bool = False, verbose: bool = False,
                 metrics: Metrics = None) -> GraphResult:
    if metrics is not None:
        metrics.start_graph()
    forest = kruskal_mst(graph, verbose=verbose)
    if metrics is not None:
        metrics.end_build()
    if verify:
        if metrics is not None:
            metrics.start_verify()
        result = check_mst(graph, forest)
        if metrics is not None:
            metrics.end_verify()
        if not result:
            raise MSTCheckError(result)
    return GraphResult(str(source), graph, forest)


def run_batch(sources: Sequence, loader: Callable[[object], Graph] = load_graph,
              verify: bool = False, verbose: bool = False) -> BatchRun:
    """Load every source through ``loader`` and build its forest.

    Raises GraphLoadError for a bad source, MSTCheckError when ``verify`` finds
    a violated optimality condition, and EmptyBatchError when ``sources`` is empty.
    """
    metrics = Metrics()
    metrics.start()
    results = []
    for source in sources:
        graph = loader(source)
        res = build_forest(source, graph, verify=verify, verbose=verbose, metrics=metrics)
        print(f"[batch] {res.source}: V={graph.num_nodes} E={graph.num_edges} -> "
              f"{describe_forest(res.forest)}, weight {res.forest.weight:.6f}", flush=True)
        results.append(res)
    metrics.stop()
    return BatchRun(results, aggregate(r.forest for r in results), metrics)


def write_forest(forest: Forest, out: TextIO = sys.stdout):
    for e in forest.edges:
        out.write(f"{e}\n")


def write_statistics(stats: BatchStatistics, out: TextIO = sys.stdout):
    out.write(f"Combined Mean: {stats.mean}\n")
    out.write(f"Combined Median: {stats.median}\n")
    out.write(f"Combined Minimum: {stats.minimum}\n")
    out.write(f"Combined Maximum: {stats.maximum}\n")


def save_results(run: BatchRun, out_dir: str, plot: bool = False, animate: bool = False) -> str:
    """Write each forest in graph file format plus a summary.json; optionally draw pictures."""
    os.makedirs(out_dir, exist_ok=True)
    entries = []
    for i, res in enumerate(run.results):
        forest_file = os.path.join(out_dir, f"forest_{i}.txt")
        save_graph_file(res.forest.num_nodes, res.forest.edges, forest_file)
        entries.append({
            'source': res.source,
            'nodes': res.graph.num_nodes,
            'edges': res.graph.num_edges,
            'forest_edges': res.forest.size,
            'components': res.forest.num_components,
            'weight': res.forest.weight,
            'forest_file': os.path.basename(forest_file),
        })

    summary_path = os.path.join(out_dir, 'summary.json')
    with open(summary_path, 'w') as f:
        json.dump({'graphs': entries,
                   'statistics': run.statistics.as_dict(),
                   'metrics': run.metrics.summary()}, f, indent=2)

    if plot or animate:
        try:
            import visualization
            if plot:
                for i, res in enumerate(run.results):
                    visualization.save_forest_visualization(
                        res.graph, res.forest, os.path.join(out_dir, f"forest_{i}.png"),
                        title=f"Kruskal MST: {os.path.basename(res.source)}")
                visualization.save_weight_chart(
                    run.statistics.weights, [os.path.basename(r.source) for r in run.results], out_dir)
            if animate:
                for i, res in enumerate(run.results):
                    frames = visualization.save_forest_animation(
                        res.graph, res.forest, os.path.join(out_dir, f"frames_{i}"), max_frames=60)
                    gif = visualization.build_gif(frames, os.path.join(out_dir, f"forest_{i}.gif"))
                    if gif:
                        print(f"[batch] Animation: {gif}")
        except Exception as e:
            print(f"[batch] Warning: could not draw pictures: {e}", file=sys.stderr)

    print(f"[batch] Results: {out_dir}")
    return summary_path


def _generated_sources(count: int, nodes: int, seed: int, tmp_dir: str) -> List[str]:
    os.makedirs(tmp_dir, exist_ok=True)
    paths = []
    for i in range(count):
        g = generate_graph(nodes, seed=seed + i)
        path = os.path.join(tmp_dir, f"graph_n{nodes}_s{seed + i}.txt")
        save_graph_file(g.num_nodes, g.edges, path)
        paths.append(path)
    return paths


def parse_args(argv):
    p = argparse.ArgumentParser(description="Kruskal minimum spanning forests and combined weight statistics")
    p.add_argument("graphs", nargs="*", help="Graph files (V E, then E lines 'v w weight')")
    p.add_argument("--list", dest="source_list", help="File listing graph paths, one per line")
    p.add_argument("--generate", type=int, default=0, help="Also generate N random connected graphs")
    p.add_argument("--nodes", type=int, default=DEFAULT_NODES, help="Nodes per generated graph")
    p.add_argument("--seed", type=int, default=DEFAULT_SEED, help="Seed of the first generated graph")
    p.add_argument("--verify", action="store_true", help="Check optimality conditions of every forest")
    p.add_argument("--out-dir", help="Directory for forest files, summary.json and pictures")
    p.add_argument("--plot", action="store_true", help="Draw forests and the weight chart (needs --out-dir)")
    p.add_argument("--animate", action="store_true", help="Render forest growth GIFs (needs --out-dir)")
    p.add_argument("--quiet", action="store_true", help="Do not print forest edges")
    p.add_argument("--verbose", action="store_true", help="Trace every accepted edge")
    p.add_argument("--mpi", action="store_true", help="Spread graphs over MPI ranks (run under mpiexec)")
    args = p.parse_args(argv)
    if (args.plot or args.animate) and not args.out_dir:
        p.error("--plot and --animate need --out-dir")
    return args


def main(argv=None):
    args = parse_args(argv)

    sources = list(args.graphs)
    if args.source_list:
        sources.extend(read_source_list(args.source_list))
    if args.generate:
        gen_dir = os.path.join(args.out_dir or '.', 'generated')
        sources.extend(_generated_sources(args.generate, args.nodes, args.seed, gen_dir))

    try:
        if args.mpi:
            from mpi_batch import run_batch_mpi
            run = run_batch_mpi(sources, verify=args.verify, verbose=args.verbose)
            if run is None:
                return 0
        else:
            run = run_batch(sources, verify=args.verify, verbose=args.verbose)
    except GraphLoadError as e:
        print(f"[batch] ERROR: {e}", file=sys.stderr)
        return 1
    except MSTCheckError as e:
        print(f"[batch] ERROR: optimality check failed: {e}", file=sys.stderr)
        return 1
    except EmptyBatchError as e:
        print(f"[batch] ERROR: no graphs given, {e}", file=sys.stderr)
        return 2

    if not args.quiet:
        for res in run.results:
            write_forest(res.forest)
    write_statistics(run.statistics)

    if args.out_dir:
        save_results(run, args.out_dir, plot=args.plot, animate=args.animate)
    return 0


if __name__ == "__main__":
    sys.exit(main())
