import pandas as pd
import pytest

from delivery_route.cli import comparison_table, format_path, main
from delivery_route.perf import Measurement
from delivery_route.plot import plot_algorithm_comparison

FAST = ["--iterations", "20", "--ants", "10", "--seed", "3"]


@pytest.fixture
def square_file(tmp_path, square):
    f = tmp_path / "input01.txt"
    f.write_text("\n".join(f"{x},{y}" for x, y in square), encoding="utf-8")
    return f


def test_aco_report(square_file, capsys):
    assert main([str(square_file), "--method", "aco", *FAST]) == 0
    out = capsys.readouterr().out
    assert "Method: Ant Colony Optimization Method" in out
    assert "Shortest Distance: 4.0" in out
    assert "Shortest Path: [1, " in out


def test_brute_force_report(square_file, capsys):
    assert main([str(square_file), "--method", "brute"]) == 0
    out = capsys.readouterr().out
    assert "Method: Brute-Force Method" in out
    assert "Shortest Path: [1, 2, 3, 4, 1]" in out


def test_verbose_prints_improvements(square_file, capsys):
    assert main([str(square_file), "--verbose", *FAST]) == 0
    assert "iter=1 best_len=" in capsys.readouterr().out


def test_compare_logs_to_csv(square_file, tmp_path, capsys):
    log = tmp_path / "results.csv"
    args = [str(square_file), "--method", "compare", "--log", str(log), *FAST]
    assert main(args) == 0
    assert main(args) == 0
    df = pd.read_csv(log)
    assert len(df) == 6
    assert set(df["Method"]) == {
        "Brute-Force Method", "Held-Karp Dynamic Programming", "Ant Colony Optimization Method",
    }
    assert (df["Found_Cost"] - 4.0).abs().max() < 1e-9
    assert "Gap_Pct" in capsys.readouterr().out


def test_compare_with_known_optimum(square_tsp, capsys):
    assert main([str(square_tsp), "--method", "compare", *FAST]) == 0
    out = capsys.readouterr().out
    assert "Known optimum : 40.0000" in out
    assert "Optimal Solution" in out


@pytest.mark.parametrize("graph", ["pheromone", "path", "convergence"])
def test_saves_plots(square_file, tmp_path, graph):
    png = tmp_path / f"{graph}.png"
    assert main([str(square_file), "--graph", graph, "--save-plot", str(png), *FAST]) == 0
    assert png.exists() and png.stat().st_size > 0


def test_comparison_plot(square_file, tmp_path):
    png = tmp_path / "cmp.png"
    assert main([str(square_file), "--method", "compare", "--graph", "comparison",
                 "--save-plot", str(png), *FAST]) == 0
    assert png.exists()


def test_pheromone_plot_needs_aco(square_file, tmp_path, capsys):
    png = tmp_path / "p.png"
    assert main([str(square_file), "--method", "brute", "--graph", "pheromone",
                 "--save-plot", str(png)]) == 0
    assert not png.exists()
    assert "[warning]" in capsys.readouterr().err


def test_missing_instance(tmp_path, capsys):
    assert main([str(tmp_path / "missing.txt")]) == 1
    assert "[error]" in capsys.readouterr().err


def test_invalid_parameters(square_file, capsys):
    assert main([str(square_file), "--degradation", "1.5"]) == 1
    assert "degradation" in capsys.readouterr().err


def test_comparison_table_against_known_optimum():
    records = [Measurement("Ant Colony Optimization Method", [0, 1, 0], 11.0, 1.0, 1.0, 50.0)]
    df = comparison_table(records, optimal_cost=10.0)
    assert list(df.columns) == ["Tour", "Cost", "Time_s", "CPU_s", "Memory_MB", "Gap_Pct"]
    assert df.loc["Ant Colony Optimization Method", "Gap_Pct"] == pytest.approx(10.0)
    assert df.loc["Optimal Solution", "Gap_Pct"] == pytest.approx(0.0)


def test_comparison_table_uses_best_exact_cost():
    records = [
        Measurement("Held-Karp Dynamic Programming", [0, 1, 2, 0], 8.0, 0.1, 0.1, 40.0),
        Measurement("Ant Colony Optimization Method", [0, 2, 1, 0], 10.0, 0.5, 0.5, 41.0),
    ]
    df = comparison_table(records)
    assert "Optimal Solution" not in df.index
    assert df["Gap_Pct"].tolist() == pytest.approx([0.0, 25.0])


def test_comparison_figure_has_a_gap_panel(tmp_path):
    records = [
        Measurement("Brute-Force Method", [0, 1, 0], 10.0, 0.2, 0.2, 30.0),
        Measurement("Ant Colony Optimization Method", [0, 1, 0], 12.0, 0.4, 0.4, 31.0),
    ]
    png = tmp_path / "cmp.png"
    fig = plot_algorithm_comparison(comparison_table(records, optimal_cost=10.0), "pair", save_path=str(png))
    titles = [ax.get_title() for ax in fig.axes]
    assert titles == ["Tour length", "Wall time", "Resident memory", "Gap to reference"]
    assert [p.get_height() for p in fig.axes[3].patches] == pytest.approx([0.0, 20.0, 0.0])
    assert png.exists()


def test_comparison_figure_without_gap_column():
    df = comparison_table([Measurement("Ant Colony Optimization Method", [0, 0], 0.0, 0.1, 0.1, 30.0)])
    assert "Gap_Pct" not in df.columns
    fig = plot_algorithm_comparison(df)
    assert len(fig.axes) == 3


def test_format_path_is_one_based():
    assert format_path([0, 2, 1, 0]) == "[1, 3, 2, 1]"


def test_unreadable_instances(tmp_path, capsys):
    bad = tmp_path / "latin1.txt"
    bad.write_bytes(b"\xff\xfe\xfd\n")
    folder = tmp_path / "houses"
    folder.mkdir()
    assert main([str(bad)]) == 1
    assert main([str(folder)]) == 1
    assert capsys.readouterr().err.count("[error] cannot read") == 2


def test_log_columns(square_file, tmp_path):
    log = tmp_path / "results.csv"
    assert main([str(square_file), "--method", "brute", "--log", str(log)]) == 0
    df = pd.read_csv(log)
    assert list(df.columns) == ["Problem", "N_Locations", "Method", "Found_Tour", "Found_Cost",
                                "Time_Taken_s", "CPU_Time_s", "Memory_Usage_MB"]
    assert df.loc[0, "Problem"] == "input01"
    assert df.loc[0, "Found_Tour"] == "0 1 2 3 0"
