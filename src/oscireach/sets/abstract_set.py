from __future__ import annotations
from dataclasses import dataclass
from abc import ABC, abstractmethod
import jax
import jax.numpy as jnp
from jaxtyping import Array

_reachset = lambda cls: dataclass(eq=False, kw_only=True, frozen=True)(cls)

def as_float_array(value) -> Array:
    """Converts to an at least 1-d floating point array in the active default precision."""
    value = jnp.atleast_1d(jnp.asarray(value))
    if not jnp.issubdtype(value.dtype, jnp.floating):
        value = value.astype(jax.dtypes.canonicalize_dtype(jnp.float64))
    return value

@_reachset
class AbstractSet(ABC):

    @property
    @abstractmethod
    def dim(self) -> int:
        """Ambient dimension of the set"""
        pass

    @abstractmethod
    def interval_hull(self) -> tuple[Array, Array]:
        """Lower and upper bounds of the smallest box enclosing the set"""
        pass

    @abstractmethod
    def sample(self, key: jax.Array, n_samples: int) -> Array:
        """Draws n_samples points of the set, shape (n_samples, dim)"""
        pass

    @abstractmethod
    def to_dtype(self, dtype) -> AbstractSet:
        pass

    def is_singleton(self) -> bool:
        return False
