# Copyright (c) 2026 Raymond Knetemann
# Licensed under the MIT License. See LICENSE file for details.

from __future__ import annotations
import jax
import jax.numpy as jnp
import time

from .sets.abstract_set import AbstractSet
from .solver.time_integration_solver import TimeIntegrationSolver
from .system.initial_value_problem import InitialValueProblem
from .utils.precision import configure_precision
from . import constants as const

def simulate(
    ivp: InitialValueProblem,
    t_span: tuple[float, float],
    n_samples: int = const.N_SIMULATION_SAMPLES,
    solver: TimeIntegrationSolver = None,
    precision: const.Precision = const.Precision.DOUBLE,
    key: jax.Array = None,
    verbose: bool = True,
) -> tuple:
    """Integrate trajectories starting from points sampled in the initial set.

    Args:
        ivp: The initial-value problem.
        t_span: The time span (t0, t1).
        n_samples: Number of initial points drawn from the initial set. A singleton,
            or the (U0, U0dot) pair of a second order problem, yields one trajectory.
        solver: The time integration solver to use.
        precision: The numerical precision to use.
        key: PRNG key for sampling, defaults to jax.random.key(0).
        verbose: Print the elapsed time.

    Returns:
        A tuple (ts, ys) where ts is the time array (shape: (n_time_steps,)) and
        ys holds the states (shape: (n_trajectories, n_time_steps, n)).
    """
    dtype = configure_precision(precision)
    solver = TimeIntegrationSolver() if solver is None else solver
    key = jax.random.key(0) if key is None else key

    ivp = ivp.to_dtype(dtype)
    if isinstance(ivp.initial_state, AbstractSet):
        n = 1 if ivp.initial_state.is_singleton() else n_samples
        y0s = ivp.initial_state.sample(key, n)
    else:
        y0s = jnp.concatenate(ivp.initial_state)[None, :]

    start_time = time.time()
    ts, ys = solver.time_response(ivp, t_span, y0s)
    if verbose:
        print("Simulation completed in {:.2f} seconds".format(time.time() - start_time))

    return ts, ys
