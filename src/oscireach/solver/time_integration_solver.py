import jax
import jax.numpy as jnp
from equinox import filter_jit
import diffrax

from ..system.continuous_system import LinearContinuousSystem, SecondOrderAffineContinuousSystem
from ..system.initial_value_problem import InitialValueProblem
from .abstract_solver import _check_t_span
from .. import constants as const

class TimeIntegrationSolver:
    def __init__(self, rtol: float = 1e-8, atol: float = 1e-10, n_time_steps: int = const.N_SIMULATION_TIME_STEPS,
                 max_steps: int = 4096, verbose: bool = False, throw: bool = True):

        self.max_steps = max_steps
        self.n_time_steps = n_time_steps
        self.rtol = rtol
        self.atol = atol
        self.verbose = verbose
        self.throw = throw

    def time_response(self,
                 ivp: InitialValueProblem,
                 t_span: tuple[float, float],
                 y0s: jax.Array,  # Shape: (n_samples, n)
                ):
        """Integrates the system from every initial state in y0s.

        Returns:
            A tuple (ts, ys) with ts of shape (n_time_steps,) and ys of shape (n_samples, n_time_steps, n).
        """
        t0, t1 = _check_t_span(t_span)
        A, b = _first_order(ivp)
        ts = jnp.linspace(t0, t1, self.n_time_steps, dtype=y0s.dtype)

        if self.verbose:
            print(f"Integrating {y0s.shape[0]} trajectories over ({t0}, {t1})")

        @filter_jit
        def solve_one_case(y0):
            sol = diffrax.diffeqsolve(
                    terms=diffrax.ODETerm(self._rhs),
                    solver=diffrax.Tsit5(),
                    t0=t0, t1=t1, dt0=None, max_steps=self.max_steps,
                    y0=y0,
                    saveat=diffrax.SaveAt(ts=ts),
                    throw=self.throw,
                    progress_meter=diffrax.NoProgressMeter(),
                    stepsize_controller=diffrax.PIDController(rtol=self.rtol, atol=self.atol),
                    args=(A, b),
            )
            return sol.ys

        ys = jax.vmap(solve_one_case)(y0s)
        return ts, ys

    @staticmethod
    def _rhs(t, y, args):
        A, b = args
        return A @ y + b


def _first_order(ivp: InitialValueProblem):
    if isinstance(ivp.system, LinearContinuousSystem):
        A = jnp.asarray(ivp.system.A)
        return A, jnp.zeros(A.shape[0], dtype=A.dtype)
    elif isinstance(ivp.system, SecondOrderAffineContinuousSystem):
        return ivp.system.first_order()
    else:
        raise ValueError(f"Unsupported system: {type(ivp.system).__name__}")
