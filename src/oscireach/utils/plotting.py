import matplotlib.pyplot as plt
import numpy as np
from matplotlib.collections import PolyCollection

from .. import constants as const
from ..oscillator.analytic import analytic_solution, analytic_derivative
from ..oscillator.harmonic_oscillator import HarmonicOscillatorProblem
from ..result.reach_solution import ReachSolution
from ..sets.singleton import Singleton

VARIABLE_LABELS = {0: "t", 1: "u(t)", 2: "u'(t)"}

def plot_reach_solution(ax, solution: ReachSolution, vars=(0, 1), *, color="tab:blue", alpha=0.5,
                        label=None, xlab=None, ylab=None):
    """Draws the projection of every reach set on the (vars[0], vars[1]) plane, 0 being time."""
    polygons = solution.project(vars)
    collection = PolyCollection(polygons, facecolors=color, edgecolors=color, alpha=alpha, linewidths=0.5, label=label)
    ax.add_collection(collection)

    points = np.concatenate(polygons, axis=0)
    ax.update_datalim(points)
    ax.autoscale_view()

    ax.set_xlabel(xlab if xlab is not None else VARIABLE_LABELS.get(vars[0], f"x{vars[0]}"))
    ax.set_ylabel(ylab if ylab is not None else VARIABLE_LABELS.get(vars[1], f"x{vars[1]}"))
    ax.grid(const.PLOT_GRID, alpha=0.25)
    return collection

def plot_analytic(ax, problem: HarmonicOscillatorProblem, vars=(0, 1), t_span=None, n_points=500,
                  *, color="k", linewidth=1.2, label="analytic"):
    """Overlays the closed-form solution on the (vars[0], vars[1]) plane."""
    t_span = (0.0, problem.period) if t_span is None else t_span
    ts = np.linspace(t_span[0], t_span[1], n_points)
    curves = {
        0: ts,
        1: np.asarray(analytic_solution(problem)(ts)),
        2: np.asarray(analytic_derivative(problem)(ts)),
    }
    return ax.plot(curves[vars[0]], curves[vars[1]], color=color, linewidth=linewidth, label=label)

def plot_flowpipes(problem: HarmonicOscillatorProblem, solution: ReachSolution, *, axes=None,
                   show_analytic=True, color="tab:blue", alpha=0.5):
    '''
    The three views of the oscillator flowpipe: (t, u), (t, u') and (u, u').
    The analytic solution is overlaid when the initial state is a single point.
    '''
    if axes is None:
        fig, axes = plt.subplots(1, 3, figsize=(15, 4.5))
    else:
        fig = axes[0].figure

    show_analytic = show_analytic and isinstance(problem.initial_state, Singleton)
    for ax, vars in zip(axes, [(0, 1), (0, 2), (1, 2)]):
        plot_reach_solution(ax, solution, vars, color=color, alpha=alpha, label=type(solution.alg).__name__)
        if show_analytic:
            plot_analytic(ax, problem, vars, t_span=solution.tspan)

    axes[0].legend(loc="upper right", fontsize=8, frameon=False)
    fig.suptitle(f"Step size $\\alpha T$ = {solution.alg.delta:.4g}")
    return fig, axes
