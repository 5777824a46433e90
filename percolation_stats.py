import math

import numpy as np
from numba import njit, config

from square_percolation import ConnectivityGrid, InvalidSize

# Enable Numba disk caching for faster subsequent runs
config.CACHE_DIR = '.numba_cache'

ENGINES = ('grid', 'nz')


# CPU using optimized Numba
@njit(cache=True)
def find_cpu(parent, x):
    root = x
    while parent[root] != root:
        root = parent[root]
    while x != root:
        next_x = parent[x]
        parent[x] = root
        x = next_x
    return root


@njit(cache=True)
def union_sized_cpu(parent, size, a, b):
    ra = find_cpu(parent, a)
    rb = find_cpu(parent, b)
    if ra == rb:
        return
    if size[ra] < size[rb]:
        parent[ra] = rb
        size[rb] += size[ra]
    else:
        parent[rb] = ra
        size[ra] += size[rb]


@njit(cache=True)
def newman_ziff_trial_cpu(order, n):
    """
    Opens the sites of an n by n grid in the given order (zero-based flat
    ids) and returns how many were open when top first reached bottom.
    """
    N = n * n
    parent = np.arange(N + 2, dtype=np.int64)
    size = np.ones(N + 2, dtype=np.int64)
    open_flags = np.zeros(N, dtype=np.uint8)

    top, bottom = N, N + 1

    for k in range(N):
        site = order[k]
        open_flags[site] = 1
        row = site // n
        col = site % n

        if row == 0:
            union_sized_cpu(parent, size, site, top)
        if row == n - 1:
            union_sized_cpu(parent, size, site, bottom)

        if row > 0 and open_flags[site - n]:
            union_sized_cpu(parent, size, site, site - n)
        if row < n - 1 and open_flags[site + n]:
            union_sized_cpu(parent, size, site, site + n)
        if col > 0 and open_flags[site - 1]:
            union_sized_cpu(parent, size, site, site - 1)
        if col < n - 1 and open_flags[site + 1]:
            union_sized_cpu(parent, size, site, site + 1)

        if find_cpu(parent, top) == find_cpu(parent, bottom):
            return k + 1

    return N


def grid_trial(order, n):
    """
    Same experiment as newman_ziff_trial_cpu, driven through ConnectivityGrid.
    """
    simulator = ConnectivityGrid(n)
    for site in order:
        row, col = divmod(int(site), n)
        simulator.open(row + 1, col + 1)
        if simulator.percolates():
            break
    return simulator.numberOfOpenSites()


class PercolationStats:
    def __init__(self, n: int, trials: int, engine: str = 'grid', seed=None):
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)) or n < 1:
            raise InvalidSize("n must be a positive integer")
        if trials <= 0:
            raise ValueError("grid size n and trials count must be positive integer")
        if engine not in ENGINES:
            raise ValueError(f"unknown engine {engine!r}, expected one of {ENGINES}")

        self.trialCount = trials
        self.gridSize = int(n)
        self.engine = engine
        self.trialResults = []

        rng = np.random.default_rng(seed)
        gridSquare = self.gridSize * self.gridSize

        for i in range(self.trialCount):
            # Shuffle all sites to simulate random opening order
            order = rng.permutation(gridSquare)
            if engine == 'nz':
                openSites = newman_ziff_trial_cpu(order, self.gridSize)
            else:
                openSites = grid_trial(order, self.gridSize)
            self.trialResults.append(openSites / gridSquare)

    def mean(self):
        return np.mean(self.trialResults)

    def std(self):
        return np.std(self.trialResults)

    def confidence_interval(self):
        margin = (1.96 * self.std()) / math.sqrt(self.trialCount)
        return self.mean() - margin, self.mean() + margin

    def report(self):
        print("="*60)
        print(f"STATS REPORT (n = {self.gridSize}, trials = {self.trialCount}, engine = {self.engine})")
        print("="*60)

        print(f"mean value of critical value pc = {self.mean(): .6f}")
        print(f"std value of critical value pc = {self.std(): .6f}")
        lo, hi = self.confidence_interval()
        print(f"the 95% confidence interval is {lo:.6f} ~ {hi:.6f}")
        print("="*60)
