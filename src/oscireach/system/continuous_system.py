from __future__ import annotations
from dataclasses import dataclass
from abc import ABC, abstractmethod
import jax.numpy as jnp
import numpy as np
from jaxtyping import Array, Float

from ..errors import InvalidParameter

_dynamical_system = lambda cls: dataclass(eq=False, kw_only=True, frozen=True)(cls)

@_dynamical_system
class AbstractContinuousSystem(ABC):

    @property
    @abstractmethod
    def state_dim(self) -> int:
        pass

    @abstractmethod
    def to_dtype(self, dtype):
        pass

@_dynamical_system
class LinearContinuousSystem(AbstractContinuousSystem):
    '''
    x'(t) = A x(t)
    '''
    A: Float[np.ndarray, "n n"]

    def __post_init__(self):
        A = np.atleast_2d(np.asarray(self.A))
        if not np.issubdtype(A.dtype, np.floating):
            A = A.astype(np.float64)
        if A.ndim != 2 or A.shape[0] != A.shape[1]:
            raise InvalidParameter(f"State matrix must be square, got shape {A.shape}.")
        object.__setattr__(self, "A", A)

    @property
    def state_dim(self) -> int:
        return self.A.shape[0]

    @property
    def state_matrix(self) -> np.ndarray:
        return self.A

    def to_dtype(self, dtype) -> LinearContinuousSystem:
        return LinearContinuousSystem(A=self.A.astype(dtype))

@_dynamical_system
class SecondOrderAffineContinuousSystem(AbstractContinuousSystem):
    '''
    M u''(t) + C u'(t) + K u(t) = R
    '''
    M: Float[Array, "n n"]
    C: Float[Array, "n n"]
    K: Float[Array, "n n"]
    R: Float[Array, "n"]

    def __post_init__(self):
        M, C, K = (jnp.atleast_2d(jnp.asarray(X)) for X in (self.M, self.C, self.K))
        R = jnp.atleast_1d(jnp.asarray(self.R))
        n = M.shape[0]
        for name, X in (("M", M), ("C", C), ("K", K)):
            if X.shape != (n, n):
                raise InvalidParameter(f"{name} has shape {X.shape}, but it should have shape ({n}, {n}).")
        if R.shape != (n,):
            raise InvalidParameter(f"R has shape {R.shape}, but it should have shape ({n},).")
        object.__setattr__(self, "M", M)
        object.__setattr__(self, "C", C)
        object.__setattr__(self, "K", K)
        object.__setattr__(self, "R", R)

    @property
    def n_dof(self) -> int:
        return self.M.shape[0]

    @property
    def state_dim(self) -> int:
        return 2 * self.n_dof

    def first_order(self) -> tuple[Array, Array]:
        """Returns (A, b) of the equivalent first order system x' = A x + b with x = [u, u']"""
        n = self.n_dof
        M_inv = jnp.linalg.inv(self.M)
        A = jnp.block([
            [jnp.zeros((n, n)), jnp.eye(n)],
            [-M_inv @ self.K,   -M_inv @ self.C],
        ])
        b = jnp.concatenate([jnp.zeros(n), M_inv @ self.R])
        return A, b

    def to_dtype(self, dtype) -> SecondOrderAffineContinuousSystem:
        return SecondOrderAffineContinuousSystem(
            M=self.M.astype(dtype), C=self.C.astype(dtype), K=self.K.astype(dtype), R=self.R.astype(dtype)
        )
