from __future__ import annotations
import math
from dataclasses import dataclass

from . import constants as const
from .errors import InvalidParameter
from .solver.hylaa_solver import APPROXIMATION_MODELS, HylaaSolver

@dataclass(kw_only=True, frozen=True)
class AnalysisConfig:
    '''
    Parameters of one reachability analysis of the harmonic oscillator.

    period, amplitude: oscillator parameters, see sdof.
    step_size_factor: alpha in [STEP_SIZE_FACTOR_MIN, STEP_SIZE_FACTOR_MAX];
        the solver step size is alpha * period.
    approx_model: "LGG" or "CHULL", see HylaaSolver.
    '''
    period: float = const.DEFAULT_PERIOD
    amplitude: float = const.DEFAULT_AMPLITUDE
    step_size_factor: float = const.DEFAULT_STEP_SIZE_FACTOR
    approx_model: str = const.DEFAULT_APPROX_MODEL
    precision: const.Precision = const.Precision.DOUBLE

    def __post_init__(self):
        if not math.isfinite(self.period) or self.period <= 0.0:
            raise InvalidParameter(f"Period must be a positive finite number, got {self.period}.")
        if not const.STEP_SIZE_FACTOR_MIN <= self.step_size_factor <= const.STEP_SIZE_FACTOR_MAX:
            raise InvalidParameter(
                f"Step size factor must lie in [{const.STEP_SIZE_FACTOR_MIN}, {const.STEP_SIZE_FACTOR_MAX}], "
                f"got {self.step_size_factor}."
            )
        if self.approx_model not in APPROXIMATION_MODELS:
            raise InvalidParameter(f"Unknown approximation model {self.approx_model!r}, expected one of {sorted(APPROXIMATION_MODELS)}.")

    @property
    def step_size(self) -> float:
        return self.step_size_factor * self.period

    @property
    def t_span(self) -> tuple[float, float]:
        return (0.0, self.period)

    def build_algorithm(self, verbose: bool = False) -> HylaaSolver:
        return HylaaSolver(delta=self.step_size, approx_model=self.approx_model, verbose=verbose)
