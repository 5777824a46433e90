import argparse

import numpy as np
import matplotlib.pyplot as plt

from square_percolation import ConnectivityGrid
from percolation_stats import PercolationStats, ENGINES
from percolation_plots import draw_grid, plot_percolation_stats, plot_extrapolation


def read_sites(path):
    """
    Reads a site file: the grid size n followed by (row, col) pairs, all
    separated by whitespace.

    :return: (n, [(row, col), ...])
    """
    with open(path) as f:
        tokens = f.read().split()

    if not tokens:
        raise ValueError(f"{path}: missing grid size")
    if len(tokens) % 2 != 1:
        raise ValueError(f"{path}: expected (row, col) pairs after the grid size")

    values = [int(token) for token in tokens]
    n = values[0]
    sites = list(zip(values[1::2], values[2::2]))
    return n, sites


def replay_sites(n, sites):
    grid = ConnectivityGrid(n)
    for row, col in sites:
        grid.open(row, col)
    return grid


def run_threshold_study(L_values, trials, engine='nz', seed=None):
    """
    Runs PercolationStats for every grid size and returns (means, stds).
    """
    means = []
    stds = []

    for n_value in L_values:
        print(f"simulate n = {n_value}")
        stats = PercolationStats(
            n=int(n_value),
            trials=trials,
            engine=engine,
            seed=seed
        )
        stats.report()
        means.append(stats.mean())
        stds.append(stats.std())

    return means, stds


def build_parser():
    parser = argparse.ArgumentParser(
        description="Run a Monte Carlo simulation for 2D site percolation."
    )

    parser.add_argument(
        '--Lmin',
        type=int,
        default=50,
        help="Minimum size of the square grid (N_min x N_min)."
    )

    parser.add_argument(
        '--Lmax',
        type=int,
        default=200,
        help="Maximum size of the square grid (N_max x N_max)."
    )

    parser.add_argument(
        '--Lstep',
        type=int,
        default=50,
        help="Step size for increasing the grid size N."
    )

    parser.add_argument(
        '--t',
        type=int,
        default=500,
        help="The number of Monte Carlo trials to perform."
    )

    parser.add_argument(
        '--engine',
        choices=ENGINES,
        default='nz',
        help="'grid' drives ConnectivityGrid, 'nz' uses the compiled kernel."
    )

    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help="Seed for the random opening order."
    )

    parser.add_argument(
        '--input',
        metavar='FILE',
        default=None,
        help="Replay a site file (n, then row col pairs) instead of running trials."
    )

    parser.add_argument(
        '--no-plot',
        action='store_true',
        help="Skip the matplotlib windows."
    )

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    if args.input is not None:
        n, sites = read_sites(args.input)
        grid = replay_sites(n, sites)

        print("="*60)
        print(f"grid size n = {n}")
        print(f"number of open sites = {grid.numberOfOpenSites()}")
        print(f"percolates = {grid.percolates()}")
        print("="*60)

        if not args.no_plot:
            draw_grid(grid)
            plt.show()
        return 0

    print("Starting Monte Carlo Percolation Analysis...")
    print(f"System sizes (N): {args.Lmin} to {args.Lmax}, step {args.Lstep}")
    print(f"Trials per size: {args.t}")

    L_values = np.arange(args.Lmin, args.Lmax + 1, args.Lstep)
    means, stds = run_threshold_study(L_values, args.t, engine=args.engine, seed=args.seed)

    print("\n--- Simulation Complete ---")

    if not args.no_plot:
        print("="*60)
        print("plotting...")
        plot_percolation_stats(L_values, means, stds)
        if len(L_values) > 1:
            plot_extrapolation(L_values, means)
        plt.show()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
