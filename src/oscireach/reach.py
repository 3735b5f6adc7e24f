# Copyright (c) 2026 Raymond Knetemann
# Licensed under the MIT License. See LICENSE file for details.

from __future__ import annotations
import time

from .config import AnalysisConfig
from .oscillator.harmonic_oscillator import HarmonicOscillatorProblem, sdof
from .result.reach_solution import ReachSolution
from .solver.abstract_solver import AbstractReachSolver, _check_t_span
from .solver.hylaa_solver import HylaaSolver
from .system.initial_value_problem import InitialValueProblem
from .utils.precision import configure_precision
from . import constants as const

def solve(
    ivp: InitialValueProblem,
    t_span: tuple[float, float],
    alg: AbstractReachSolver = None,
    precision: const.Precision = const.Precision.DOUBLE,
    verbose: bool = True,
) -> ReachSolution:
    """Compute the flowpipe of a linear initial-value problem.

    Args:
        ivp: The problem x' = A x, x(0) in X0.
        t_span: The time span (t0, t1).
        alg: The reachability algorithm. Defaults to HylaaSolver with the LGG
            approximation model and a step size of DEFAULT_STEP_SIZE_FACTOR * (t1 - t0).
        precision: The numerical precision to use.
        verbose: Print the problem and the elapsed time.

    Returns:
        A ReachSolution with one reach set per time step.
    """
    t0, t1 = _check_t_span(t_span)
    dtype = configure_precision(precision)

    if alg is None:
        alg = HylaaSolver(delta=const.DEFAULT_STEP_SIZE_FACTOR * (t1 - t0))

    ivp = ivp.to_dtype(dtype)

    if verbose:
        print("Reachability: ", alg)
    start_time = time.time()
    solution = alg.solve(ivp, (t0, t1))
    if verbose:
        print("Reachability completed in {:.2f} seconds ({} reach sets)".format(time.time() - start_time, len(solution)))

    return solution

def reach_oscillator(config: AnalysisConfig = AnalysisConfig(), verbose: bool = True) -> tuple[HarmonicOscillatorProblem, ReachSolution]:
    """Flowpipe of the harmonic oscillator over one period with step size alpha * period."""
    configure_precision(config.precision)
    problem = sdof(period=config.period, amplitude=config.amplitude)
    alg = config.build_algorithm(verbose=verbose)
    solution = solve(problem.ivp, config.t_span, alg=alg, precision=config.precision, verbose=verbose)
    return problem, solution
