#!/usr/bin/env python3
"""MPI batch: independent graphs spread over ranks, forests gathered and reduced on rank 0."""
from typing import Callable, Optional, Sequence

from mpi4py import MPI

from batch_stats import aggregate
from graph_utils import Graph, GraphLoadError, load_graph
from metrics import Metrics
from mst_main import BatchRun, build_forest
from validate_mst import MSTCheckError


def run_batch_mpi(sources: Sequence, loader: Callable[[object], Graph] = load_graph,
                  verify: bool = False, verbose: bool = False, comm=None) -> Optional[BatchRun]:
    """Rank r handles sources[r::size]; rank 0 returns the BatchRun, other ranks None.

    Results are put back into source order before aggregation, so the
    statistics do not depend on which rank finished first. A load or
    optimality failure on any rank is re-raised on rank 0 (first failing
    source wins); other ranks just return.
    """
    comm = comm if comm is not None else MPI.COMM_WORLD
    rank = comm.Get_rank()
    size = comm.Get_size()

    if rank == 0:
        print(f"[mpi-batch] {len(sources)} graph(s) over {size} rank(s)", flush=True)

    metrics = Metrics()
    metrics.start()
    local = []
    for index in range(rank, len(sources), size):
        source = sources[index]
        try:
            res = build_forest(source, loader(source), verify=verify, verbose=verbose, metrics=metrics)
        except (GraphLoadError, MSTCheckError) as e:
            local.append((index, None, e))
            continue
        local.append((index, res, None))
    metrics.stop()

    gathered = comm.gather((local, metrics.build_times, metrics.verify_times), root=0)
    if rank != 0:
        return None

    merged = Metrics()
    entries = []
    for part, build_times, verify_times in gathered:
        entries.extend(part)
        merged.build_times.extend(build_times)
        merged.verify_times.extend(verify_times)
    merged.start_time = metrics.start_time
    merged.end_time = metrics.end_time
    entries.sort(key=lambda item: item[0])

    for index, _, error in entries:
        if error is not None:
            raise error

    results = [res for _, res, _ in entries]
    for res in results:
        print(f"[mpi-batch] {res.source}: {res.forest.size} forest edges, "
              f"weight {res.forest.weight:.6f}", flush=True)
    return BatchRun(results, aggregate(r.forest for r in results), merged)
