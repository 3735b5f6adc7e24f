from __future__ import annotations
import jax
import jax.numpy as jnp
from jaxtyping import Array, Float

from .abstract_set import AbstractSet, _reachset, as_float_array
from ..errors import InvalidParameter

@_reachset
class Hyperrectangle(AbstractSet):
    center: Float[Array, "n"]
    radius: Float[Array, "n"]

    def __post_init__(self):
        center = as_float_array(self.center)
        radius = as_float_array(self.radius)
        if center.shape != radius.shape:
            raise InvalidParameter(f"Center has shape {center.shape}, but radius has shape {radius.shape}.")
        if bool(jnp.any(radius < 0.0)):
            raise InvalidParameter(f"Radius must be non-negative, got {radius}.")
        object.__setattr__(self, "center", center)
        object.__setattr__(self, "radius", radius)

    @classmethod
    def from_bounds(cls, low, high) -> Hyperrectangle:
        low = as_float_array(low)
        high = as_float_array(high)
        return cls(center=(low + high) / 2, radius=(high - low) / 2)

    @property
    def dim(self) -> int:
        return self.center.shape[0]

    def is_singleton(self) -> bool:
        return bool(jnp.all(self.radius == 0.0))

    def interval_hull(self):
        return self.center - self.radius, self.center + self.radius

    def sample(self, key, n_samples):
        u = jax.random.uniform(key, (n_samples, self.dim), minval=-1.0, maxval=1.0, dtype=self.center.dtype)
        return self.center[None, :] + u * self.radius[None, :]

    def to_dtype(self, dtype) -> Hyperrectangle:
        return Hyperrectangle(center=self.center.astype(dtype), radius=self.radius.astype(dtype))

    def __repr__(self):
        return (f"Hyperrectangle(center={[float(v) for v in self.center]}, "
                f"radius={[float(v) for v in self.radius]})")
