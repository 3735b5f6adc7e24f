from __future__ import annotations
import jax
import jax.numpy as jnp
from jaxtyping import Array, Float

from .abstract_set import AbstractSet, _reachset, as_float_array

@_reachset
class Singleton(AbstractSet):
    element: Float[Array, "n"]

    def __post_init__(self):
        object.__setattr__(self, "element", as_float_array(self.element))

    @property
    def dim(self) -> int:
        return self.element.shape[0]

    def is_singleton(self) -> bool:
        return True

    def interval_hull(self):
        return self.element, self.element

    def sample(self, key, n_samples):
        return jnp.tile(self.element[None, :], (n_samples, 1))

    def to_dtype(self, dtype) -> Singleton:
        return Singleton(element=self.element.astype(dtype))

    def __repr__(self):
        return f"Singleton({[float(v) for v in self.element]})"
