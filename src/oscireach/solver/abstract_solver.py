import math
from abc import ABC, abstractmethod

from ..errors import InvalidParameter
from ..result.reach_solution import ReachSolution
from ..system.initial_value_problem import InitialValueProblem

class AbstractReachSolver(ABC):
    def __init__(self, delta: float, verbose: bool = False):
        delta = float(delta)
        if not math.isfinite(delta) or delta <= 0.0:
            raise InvalidParameter(f"Step size delta must be a positive finite number, got {delta}.")

        self.delta = delta
        self.verbose = verbose

    def n_steps(self, t_span: tuple[float, float]) -> int:
        t0, t1 = _check_t_span(t_span)
        # tolerate t1 - t0 landing a rounding error above a multiple of delta
        return max(int(math.ceil((t1 - t0) / self.delta - 1e-9)), 1)

    @abstractmethod
    def solve(self,
            ivp: InitialValueProblem,
            t_span: tuple[float, float],
        ) -> ReachSolution:
        pass

    def __repr__(self):
        return f"{type(self).__name__}(delta={self.delta:.6g})"


def _check_t_span(t_span) -> tuple[float, float]:
    if len(t_span) != 2:
        raise InvalidParameter(f"Time span must be a pair (t0, t1), got {t_span}.")
    t0, t1 = float(t_span[0]), float(t_span[1])
    if not (math.isfinite(t0) and math.isfinite(t1)) or t1 <= t0:
        raise InvalidParameter(f"Time span must satisfy t0 < t1, got ({t0}, {t1}).")
    return t0, t1
