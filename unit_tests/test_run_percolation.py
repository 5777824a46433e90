import matplotlib.pyplot as plt
import pytest
from run_percolation import read_sites, replay_sites, run_threshold_study, main


def test_read_sites(tmp_path):
    path = tmp_path / "sites.txt"
    path.write_text("3\n1 2\n2 2\n  3 2\n")
    n, sites = read_sites(path)
    assert n == 3
    assert sites == [(1, 2), (2, 2), (3, 2)]


def test_read_sites_rejects_malformed_files(tmp_path):
    empty = tmp_path / "empty.txt"
    empty.write_text("")
    with pytest.raises(ValueError, match="grid size"):
        read_sites(empty)

    odd = tmp_path / "odd.txt"
    odd.write_text("3\n1 2\n2\n")
    with pytest.raises(ValueError, match="pairs"):
        read_sites(odd)


def test_replay_sites():
    grid = replay_sites(3, [(1, 2), (2, 2), (2, 2), (3, 2)])
    assert grid.numberOfOpenSites() == 3
    assert grid.percolates()


def test_run_threshold_study(capsys):
    means, stds = run_threshold_study([2, 4], 5, engine='grid', seed=0)
    assert len(means) == 2
    assert len(stds) == 2
    assert "simulate n = 4" in capsys.readouterr().out


def test_main_replays_input_file(tmp_path, capsys):
    path = tmp_path / "sites.txt"
    path.write_text("3\n1 1\n3 1\n")
    assert main(["--input", str(path), "--no-plot"]) == 0
    out = capsys.readouterr().out
    assert "number of open sites = 2" in out
    assert "percolates = False" in out


def test_main_runs_threshold_study(capsys):
    assert main(["--Lmin", "5", "--Lmax", "10", "--Lstep", "5", "--t", "4",
                 "--engine", "grid", "--seed", "1", "--no-plot"]) == 0
    out = capsys.readouterr().out
    assert "Simulation Complete" in out


def test_main_plots_without_showing(tmp_path, monkeypatch):
    shown = []
    monkeypatch.setattr("run_percolation.plt.show", lambda: shown.append(True))
    path = tmp_path / "sites.txt"
    path.write_text("2\n1 1\n2 1\n")
    assert main(["--input", str(path)]) == 0
    assert shown == [True]
    plt.close("all")
