from __future__ import annotations
from typing import Callable, Optional
import jax
import jax.numpy as jnp

from .harmonic_oscillator import HarmonicOscillatorProblem
from ..errors import PreconditionError
from ..sets.singleton import Singleton
from ..system.continuous_system import SecondOrderAffineContinuousSystem
from ..system.initial_value_problem import InitialValueProblem

def _require_singleton(p: HarmonicOscillatorProblem):
    if not isinstance(p.initial_state, Singleton):
        raise PreconditionError("The analytic solution requires a singleton initial condition.")

def _amplitude_and_phase(p, A, B, x0, v0):
    omega = p.angular_frequency
    if A is None:
        A = p.amplitude
    if B is None:
        B = 0.0
    if x0 is not None and v0 is not None:
        # atan2 keeps A cos(B) = x0 for x0 <= 0; for x0 = 0 the phase is -pi/2 * sign(v0)
        A = jnp.sqrt(x0**2 + v0**2 / omega**2)
        B = jnp.arctan2(-v0 / omega, x0)
    return omega, A, B

def analytic_solution(p: HarmonicOscillatorProblem,
                      A: Optional[float] = None,
                      B: Optional[float] = None,
                      x0: Optional[float] = None,
                      v0: Optional[float] = None) -> Callable[[jax.Array], jax.Array]:
    """Displacement u(t) = A cos(omega t + B).

    Args:
        p: The oscillator problem. Its initial state must be a single point.
        A: Amplitude, defaults to the problem amplitude.
        B: Phase, defaults to 0.0.
        x0, v0: Initial displacement and velocity. When both are given, A and B
            are recovered from them and any passed A and B are ignored.

    Returns:
        A function of time accepting scalars or arrays.
    """
    _require_singleton(p)
    omega, A, B = _amplitude_and_phase(p, A, B, x0, v0)
    return lambda t: A * jnp.cos(omega * t + B)

def analytic_derivative(p: HarmonicOscillatorProblem,
                        A: Optional[float] = None,
                        B: Optional[float] = None,
                        x0: Optional[float] = None,
                        v0: Optional[float] = None) -> Callable[[jax.Array], jax.Array]:
    """Velocity u'(t) = -omega A sin(omega t + B). Arguments as in analytic_solution."""
    _require_singleton(p)
    omega, A, B = _amplitude_and_phase(p, A, B, x0, v0)
    return lambda t: -omega * A * jnp.sin(omega * t + B)

def second_order_ivp(p: HarmonicOscillatorProblem) -> InitialValueProblem:
    '''
    The problem as M u'' + C u' + K u = R with M = 1, C = 0, K = omega^2, R = 0
    and initial displacement / velocity taken from the initial point.
    '''
    _require_singleton(p)
    omega = p.angular_frequency
    system = SecondOrderAffineContinuousSystem(
        M=jnp.ones((1, 1)),
        C=jnp.zeros((1, 1)),
        K=jnp.full((1, 1), omega**2),
        R=jnp.zeros(1),
    )
    x0 = p.initial_state.element
    U0 = x0[:1]
    U0dot = x0[1:2]
    return InitialValueProblem(system=system, initial_state=(U0, U0dot))
