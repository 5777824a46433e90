import numpy as np
import matplotlib.pyplot as plt
from matplotlib.colors import ListedColormap
from scipy.stats import linregress

# Colours: blocked, open, full
cols = ListedColormap([
    [0.0, 0.0, 0.0],
    [1.0, 1.0, 1.0],
    [0.42, 0.68, 0.91],
])

BLOCKED, OPEN, FULL = 0, 1, 2


def grid_states(grid):
    """
    Returns an (n, n) int array holding BLOCKED, OPEN or FULL for every site,
    read through the grid's public queries.
    """
    n = grid.gridSize
    states = np.full((n, n), BLOCKED, dtype=np.int8)
    for row in range(1, n + 1):
        for col in range(1, n + 1):
            if grid.isFull(row, col):
                states[row - 1, col - 1] = FULL
            elif grid.isOpen(row, col):
                states[row - 1, col - 1] = OPEN
    return states


def draw_grid(grid, ax=None):
    """
    Draw the current state of a ConnectivityGrid.

    Args:
        grid: ConnectivityGrid instance
        ax: Optional axes to draw on

    Returns:
        fig, ax
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 8), dpi=100)
    else:
        fig = ax.figure

    ax.imshow(grid_states(grid), cmap=cols, vmin=BLOCKED, vmax=FULL, interpolation='nearest')
    ax.set_xticks([])
    ax.set_yticks([])

    status = "percolates" if grid.percolates() else "does not percolate"
    ax.set_title(f"{grid.numberOfOpenSites()} open sites, {status}", fontsize=14)
    return fig, ax


def plot_percolation_stats(L_values, means, stds):
    """
    Generates an error bar plot of the mean critical probability vs L.
    """
    fig, ax = plt.subplots(figsize=(10, 6))

    ax.errorbar(
        L_values,
        means,
        yerr=stds,
        fmt='o-',
        color='blue',
        ecolor='blue',
        capsize=5,
        label='Mean $p_c \\pm \\sigma$'
    )

    ax.set_xlabel('Linear System Size ($L$)', fontsize=14)
    ax.set_ylabel('Mean Critical Probability ($\\bar{p}_c$)', fontsize=14)
    ax.set_title('Mean $p_c$ vs. System Size ($L$)', fontsize=16)

    ax.grid(True, linestyle='--', alpha=0.6)
    ax.legend(loc='best')
    return fig, ax


def plot_extrapolation(L_values, means, exponent=-3/4):
    """
    Plots mean critical probability vs L^(exponent), fits a line and
    estimates pc(infinity) from its intercept.

    :return: (fig, ax, {'pc_inf': intercept, 'R2': r^2})
    """
    L_values = np.asarray(L_values, dtype=float)
    means = np.asarray(means, dtype=float)

    # Scaling variable
    X_scaling = L_values ** exponent

    fig, ax = plt.subplots(figsize=(10, 6))

    slope, intercept, r_value, p_value, std_err = linregress(X_scaling, means)
    result = {'pc_inf': intercept, 'R2': r_value**2}

    X_plot_min = 0.0
    X_plot_max = float(np.max(X_scaling) * 1.05)
    X_line = np.linspace(X_plot_min, X_plot_max, 100)
    Y_line = slope * X_line + intercept

    # Fit line
    ax.plot(X_line, Y_line, color='blue', linestyle='--',
            label=f"Fit: $p_c(\\infty)$ = {intercept:.5f}")
    # Data points
    ax.plot(X_scaling, means, 'o', color='blue', markersize=8,
            label="Data $\\bar{p}_c(L)$")
    # Intercept marker at X=0
    ax.plot(0, intercept, 'x', color='blue', markersize=10)

    ax.set_xlabel(f'$L^{{{exponent:.2f}}}$', fontsize=14)
    ax.set_ylabel('Mean Critical Probability ($\\bar{p}_c$)', fontsize=14)
    ax.set_title('Finite-Size Scaling Extrapolation', fontsize=16)

    ax.set_xlim(X_plot_min - 0.05 * X_plot_max, X_plot_max)
    ax.grid(True, linestyle='--', alpha=0.6)
    ax.legend(loc='best')

    print(f"\n--- Extrapolation Results (exponent {exponent:.2f}) ---")
    print(f"pc(infinity) = {result['pc_inf']:.6f}, R^2 = {result['R2']:.4f}")
    print("-------------------------------------------------------")

    return fig, ax, result
