import io
import json
import re

import pytest

from batch_stats import EmptyBatchError
from graph_utils import Graph, GraphLoadError, load_graph, save_graph_file
from kruskal import kruskal_mst
from mst_main import describe_forest, main, run_batch, save_results, write_forest, write_statistics

GRAPHS = {
    'triangle': Graph.from_tuples(3, [(0, 1, 2.0), (1, 2, 3.0), (0, 2, 4.0)]),
    'pairs': Graph.from_tuples(4, [(0, 1, 1.0), (2, 3, 1.0)]),
    'path': Graph.from_tuples(4, [(0, 1, 4.0), (1, 2, 4.0), (2, 3, 1.0), (0, 3, 9.0)]),
}


def test_run_batch_with_injected_loader():
    run = run_batch(['triangle', 'pairs', 'path'], loader=GRAPHS.__getitem__, verify=True)
    assert [r.forest.weight for r in run.results] == [5.0, 2.0, 9.0]
    assert run.statistics.mean == pytest.approx(16.0 / 3)
    assert run.statistics.median == 5.0
    assert run.metrics.summary()['graphs'] == 3
    assert len(run.metrics.verify_times) == 3


def test_run_batch_empty():
    with pytest.raises(EmptyBatchError):
        run_batch([], loader=GRAPHS.__getitem__)


def test_run_batch_propagates_load_errors(tmp_path):
    with pytest.raises(GraphLoadError):
        run_batch([tmp_path / "missing.txt"])


def test_write_forest_format():
    out = io.StringIO()
    write_forest(kruskal_mst(GRAPHS['triangle']), out)
    assert out.getvalue() == "0-1 2.00000\n1-2 3.00000\n"


def test_write_statistics_lines():
    run = run_batch(['triangle', 'pairs', 'path'], loader=GRAPHS.__getitem__)
    out = io.StringIO()
    write_statistics(run.statistics, out)
    lines = out.getvalue().splitlines()
    assert lines[0].startswith("Combined Mean: 5.333")
    assert lines[1:] == ["Combined Median: 5.0", "Combined Minimum: 2.0", "Combined Maximum: 9.0"]


def test_save_results(tmp_path):
    run = run_batch(['triangle', 'pairs'], loader=GRAPHS.__getitem__)
    summary_path = save_results(run, tmp_path / "out")
    with open(summary_path) as f:
        summary = json.load(f)
    assert summary['statistics']['count'] == 2
    assert summary['graphs'][1]['components'] == 2
    forest = load_graph(tmp_path / "out" / "forest_0.txt")
    assert [e.as_tuple() for e in forest.edges] == [(0, 1, 2.0), (1, 2, 3.0)]


def _write(tmp_path, name, graph):
    path = tmp_path / name
    save_graph_file(graph.num_nodes, graph.edges, path)
    return str(path)


def test_main_prints_edges_and_statistics(tmp_path, capsys):
    paths = [_write(tmp_path, f"{k}.txt", g) for k, g in GRAPHS.items()]
    listing = tmp_path / "sources.txt"
    listing.write_text("\n".join(paths[1:]) + "\n")
    assert main([paths[0], "--list", str(listing), "--verify"]) == 0
    out = capsys.readouterr().out
    assert "0-1 2.00000" in out
    assert "2-3 1.00000" in out
    assert "Combined Median: 5.0" in out
    assert "Combined Maximum: 9.0" in out


def test_main_without_graphs_fails(capsys):
    assert main([]) == 2
    assert "no graphs" in capsys.readouterr().err


def test_main_reports_bad_graph(tmp_path, capsys):
    bad = tmp_path / "bad.txt"
    bad.write_text("2 1\n0 5 1.0\n")
    assert main([str(bad)]) == 1
    assert "[batch] ERROR" in capsys.readouterr().err


def test_main_generates_graphs(tmp_path, capsys):
    out_dir = tmp_path / "run"
    assert main(["--generate", "2", "--nodes", "12", "--quiet", "--out-dir", str(out_dir)]) == 0
    assert (out_dir / "summary.json").exists()
    assert len(list((out_dir / "generated").iterdir())) == 2
    out = capsys.readouterr().out
    assert "Combined Mean:" in out
    assert not re.search(r"^\d+-\d+ ", out, re.MULTILINE)


def test_describe_forest_distinguishes_trees_from_forests():
    assert describe_forest(kruskal_mst(GRAPHS['triangle'])) == "spanning tree of 2 edges"
    assert describe_forest(kruskal_mst(GRAPHS['pairs'])) == "2 forest edges over 2 components"


@pytest.mark.parametrize("flag", ["--plot", "--animate"])
def test_picture_flags_need_out_dir(tmp_path, flag, capsys):
    path = _write(tmp_path, "t.txt", GRAPHS['triangle'])
    with pytest.raises(SystemExit) as exc:
        main([path, flag])
    assert exc.value.code == 2
    assert "--out-dir" in capsys.readouterr().err
