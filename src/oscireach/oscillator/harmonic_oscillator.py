from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import Optional
import numpy as np

from .. import constants as const
from ..errors import InvalidParameter
from ..sets.abstract_set import AbstractSet
from ..sets.singleton import Singleton
from ..system.continuous_system import LinearContinuousSystem
from ..system.initial_value_problem import InitialValueProblem

_problem = lambda cls: dataclass(eq=False, kw_only=True, frozen=True)(cls)

@_problem
class HarmonicOscillatorProblem:
    '''
    Single degree of freedom harmonic oscillator
        u''(t) + omega^2 u(t) = 0,   omega = 2 pi / period
    cast as the first order system x' = [[0, 1], [-omega^2, 0]] x with x = [u, u'].

    Solution: u(t) = A cos(omega t + B), u'(t) = -omega A sin(omega t + B),
    so u(0) = A cos(B) and u'(0) = -omega A sin(B).
    With u(0) = A, u'(0) = 0 this reduces to u(t) = A cos(omega t).
    '''
    period: float = const.DEFAULT_PERIOD
    amplitude: float = const.DEFAULT_AMPLITUDE
    initial_state: Optional[AbstractSet] = None

    ivp: InitialValueProblem = field(init=False, repr=False)

    def __post_init__(self):
        period = float(self.period)
        if not math.isfinite(period) or period <= 0.0:
            raise InvalidParameter(f"Period must be a positive finite number, got {self.period}.")
        object.__setattr__(self, "period", period)
        object.__setattr__(self, "amplitude", float(self.amplitude))

        if self.initial_state is None:
            object.__setattr__(self, "initial_state", Singleton(element=[self.amplitude, 0.0]))
        elif not isinstance(self.initial_state, AbstractSet):
            raise InvalidParameter(f"Initial state must be a set, got {type(self.initial_state).__name__}.")
        if self.initial_state.dim != 2:
            raise InvalidParameter(f"Initial state must have dimension 2 ([position, velocity]), got {self.initial_state.dim}.")

        omega = self.angular_frequency
        A = np.array([[ 0.0,      1.0],
                      [-omega**2, 0.0]], dtype=np.float64)
        system = LinearContinuousSystem(A=A)
        object.__setattr__(self, "ivp", InitialValueProblem(system=system, initial_state=self.initial_state))

    @property
    def angular_frequency(self) -> float:
        return 2 * math.pi / self.period

    @property
    def frequency(self) -> float:
        return self.angular_frequency

    @property
    def state_matrix(self) -> np.ndarray:
        return self.ivp.state_matrix

    def __repr__(self):
        return (f"HarmonicOscillatorProblem(period={self.period:.6f}, "
                f"omega={self.angular_frequency:.6f}, amplitude={self.amplitude:.6f}, "
                f"initial_state={self.initial_state!r})")


def sdof(period: float = const.DEFAULT_PERIOD,
         amplitude: float = const.DEFAULT_AMPLITUDE,
         initial_state: Optional[AbstractSet] = None) -> HarmonicOscillatorProblem:
    """Builds the harmonic oscillator problem; the initial state defaults to the point [amplitude, 0]."""
    return HarmonicOscillatorProblem(period=period, amplitude=amplitude, initial_state=initial_state)
