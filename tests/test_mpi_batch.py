import pytest

pytest.importorskip("mpi4py")

from graph_utils import Graph, GraphLoadError  # noqa: E402
from mpi_batch import run_batch_mpi  # noqa: E402
from mst_main import run_batch  # noqa: E402

GRAPHS = {
    'triangle': Graph.from_tuples(3, [(0, 1, 2.0), (1, 2, 3.0), (0, 2, 4.0)]),
    'pairs': Graph.from_tuples(4, [(0, 1, 1.0), (2, 3, 1.0)]),
}


def test_single_rank_matches_sequential_batch():
    sources = ['triangle', 'pairs', 'triangle']
    run = run_batch_mpi(sources, loader=GRAPHS.__getitem__, verify=True)
    expected = run_batch(sources, loader=GRAPHS.__getitem__)
    assert run.statistics == expected.statistics
    assert [r.source for r in run.results] == sources


def test_load_errors_reach_rank_zero():
    def failing(name):
        if name == 'missing':
            raise GraphLoadError("missing source")
        return GRAPHS[name]

    with pytest.raises(GraphLoadError):
        run_batch_mpi(['triangle', 'missing'], loader=failing)


def test_verbose_traces_accepted_edges(capsys):
    run_batch_mpi(['triangle'], loader=GRAPHS.__getitem__, verbose=True)
    assert "[kruskal] Edge 1: (0, 1) = 2.000000" in capsys.readouterr().out
