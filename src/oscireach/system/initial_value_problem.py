from __future__ import annotations
from dataclasses import dataclass
from typing import Any

from .continuous_system import AbstractContinuousSystem, LinearContinuousSystem
from ..sets.abstract_set import AbstractSet
from ..errors import InvalidParameter

@dataclass(eq=False, kw_only=True, frozen=True)
class InitialValueProblem:
    system: AbstractContinuousSystem
    initial_state: Any  # AbstractSet, or (U0, U0dot) for second order systems

    def __post_init__(self):
        if isinstance(self.initial_state, AbstractSet) and self.initial_state.dim != self.system.state_dim:
            raise InvalidParameter(
                f"System has state dimension {self.system.state_dim}, "
                f"but the initial state has dimension {self.initial_state.dim}."
            )
        if isinstance(self.initial_state, tuple) and sum(len(x) for x in self.initial_state) != self.system.state_dim:
            raise InvalidParameter(
                f"System has state dimension {self.system.state_dim}, "
                f"but the initial displacement and velocity have lengths {[len(x) for x in self.initial_state]}."
            )

    @property
    def state_matrix(self):
        if not isinstance(self.system, LinearContinuousSystem):
            raise InvalidParameter(f"{type(self.system).__name__} has no single state matrix.")
        return self.system.state_matrix

    def to_dtype(self, dtype) -> InitialValueProblem:
        initial_state = self.initial_state
        if isinstance(initial_state, AbstractSet):
            initial_state = initial_state.to_dtype(dtype)
        else:
            initial_state = tuple(x.astype(dtype) for x in initial_state)
        return InitialValueProblem(system=self.system.to_dtype(dtype), initial_state=initial_state)
