import jax
import jax.numpy as jnp

from .. import constants as const

def configure_precision(precision: const.Precision) -> jnp.dtype:
    """Switches jax to the requested floating point precision and returns the matching dtype."""
    if precision == const.Precision.DOUBLE:
        jax.config.update("jax_enable_x64", True)
        return jnp.float64
    elif precision == const.Precision.SINGLE:
        jax.config.update("jax_enable_x64", False)
        return jnp.float32
    else:
        raise ValueError(f"Unsupported precision: {precision}")
