import itertools
import numpy as np
import jax.numpy as jnp
from scipy.sparse import csr_matrix

from hylaa import lputil
from hylaa.core import Core
from hylaa.hybrid_automaton import HybridAutomaton
from hylaa.settings import HylaaSettings, PlotSettings
from hylaa.stateset import StateSet

from ..errors import InvalidParameter
from ..result.reach_solution import ReachSolution
from ..sets.abstract_set import AbstractSet
from ..system.continuous_system import LinearContinuousSystem
from ..system.initial_value_problem import InitialValueProblem
from .abstract_solver import AbstractReachSolver, _check_t_span
from .. import constants as const

APPROXIMATION_MODELS = {
    "LGG": HylaaSettings.APPROX_LGG,
    "CHULL": HylaaSettings.APPROX_CHULL,
}

MODE_NAME = "flow"

class HylaaSolver(AbstractReachSolver):
    '''
    Flowpipe of x' = A x, x(t0) in X0, computed by Hylaa.

    The system becomes a single-mode hybrid automaton, X0 enters as its interval hull,
    and Hylaa takes one step of size delta per reach set. Reach set k is attached to
    [t0 + k delta, t0 + (k+1) delta], the last interval clipped to t1.

    approx_model:
        "LGG": convex hull of X0 and exp(A delta) X0 bloated as in Le Guernic and Girard (2010).
            Reach set k encloses every trajectory over its whole time interval.
        "CHULL": the same convex hull without bloating. Reach set k holds the states
            at both ends of its time interval, not necessarily in between.
    '''
    def __init__(self, delta: float, approx_model: str = const.DEFAULT_APPROX_MODEL, verbose: bool = False):
        super().__init__(delta=delta, verbose=verbose)

        if approx_model not in APPROXIMATION_MODELS:
            raise InvalidParameter(
                f"Unknown approximation model {approx_model!r}, expected one of {sorted(APPROXIMATION_MODELS)}."
            )
        self.approx_model = approx_model

    def solve(self,
            ivp: InitialValueProblem,
            t_span: tuple[float, float],
        ) -> ReachSolution:

        t0, t1 = _check_t_span(t_span)
        if not isinstance(ivp.system, LinearContinuousSystem):
            raise InvalidParameter(f"{type(self).__name__} needs a LinearContinuousSystem, got {type(ivp.system).__name__}.")
        if not isinstance(ivp.initial_state, AbstractSet):
            raise InvalidParameter(f"Initial state must be a set, got {type(ivp.initial_state).__name__}.")

        n = ivp.system.state_dim
        n_steps = self.n_steps((t0, t1))
        pairs = list(itertools.combinations(range(n), 2))

        ha = HybridAutomaton()
        mode = ha.new_mode(MODE_NAME)
        mode.set_dynamics(csr_matrix(np.asarray(ivp.system.A, dtype=float)))

        low, high = (np.asarray(b, dtype=float) for b in ivp.initial_state.interval_hull())
        init_lpi = lputil.from_box([[lo, hi] for lo, hi in zip(low, high)], mode)

        settings = self._settings(n, n_steps, pairs)
        result = Core(ha, settings).run([StateSet(init_lpi, mode)])

        # one plot per state variable against time, then one per pair of state variables
        step_to_verts = [
            {step: np.array(verts, dtype=float) for verts, _, step, _ in plot[MODE_NAME]}
            for plot in result.plot_data.mode_to_obj_list
        ]

        missing = [k for k in range(n_steps) if k not in step_to_verts[0]]
        if missing:
            raise RuntimeError(f"Hylaa stopped before step {missing[0]} of {n_steps}.")

        lows = np.empty((n_steps, n))
        highs = np.empty((n_steps, n))
        for i in range(n):
            for k in range(n_steps):
                values = step_to_verts[i][k][:, 1]
                lows[k, i], highs[k, i] = values.min(), values.max()

        polygons = {}
        for p, pair in enumerate(pairs, start=n):
            # hylaa closes every polygon by repeating its first vertex
            polygons[pair] = [step_to_verts[p][k][:-1] for k in range(n_steps)]

        starts = t0 + self.delta * np.arange(n_steps)
        ends = np.minimum(starts + self.delta, t1)
        ends[-1] = t1

        dtype = ivp.system.A.dtype
        return ReachSolution(
            tspans=jnp.asarray(np.stack([starts, ends], axis=1), dtype=dtype),
            lows=jnp.asarray(lows, dtype=dtype),
            highs=jnp.asarray(highs, dtype=dtype),
            polygons=polygons,
            alg=self,
        )

    def _settings(self, n: int, n_steps: int, pairs: list[tuple[int, int]]) -> HylaaSettings:
        settings = HylaaSettings(self.delta, n_steps * self.delta)
        settings.num_steps = n_steps
        settings.approx_model = APPROXIMATION_MODELS[self.approx_model]
        settings.stdout = HylaaSettings.STDOUT_NORMAL if self.verbose else HylaaSettings.STDOUT_NONE

        plot_settings = settings.plot
        plot_settings.plot_mode = PlotSettings.PLOT_NONE
        plot_settings.store_plot_result = True
        plot_settings.xdim_dir = [None] * n + [i for i, _ in pairs]
        plot_settings.ydim_dir = list(range(n)) + [j for _, j in pairs]

        return settings

    def __repr__(self):
        return f"{type(self).__name__}(delta={self.delta:.6g}, approx_model={self.approx_model!r})"
