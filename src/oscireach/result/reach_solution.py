from __future__ import annotations
from dataclasses import dataclass
import numpy as np
from jax import tree_util
from jaxtyping import Array, Float

from ..errors import InvalidParameter
from ..sets.hyperrectangle import Hyperrectangle

@dataclass(eq=False, frozen=True)
class ReachSet:
    set: Hyperrectangle
    tspan: tuple[float, float]

    @property
    def tstart(self) -> float:
        return self.tspan[0]

    @property
    def tend(self) -> float:
        return self.tspan[1]


class ReachSolution:
    '''
    Flowpipe of n_sets reach sets. Set k lies in the box [lows[k], highs[k]] over the
    time interval tspans[k]. polygons[(i, j)][k] holds the vertices of its projection
    on the state variables i and j.
    '''
    def __init__(
        self,
        tspans: Float[Array, "n_sets 2"],
        lows: Float[Array, "n_sets n"],
        highs: Float[Array, "n_sets n"],
        polygons: dict[tuple[int, int], list[np.ndarray]] = None,
        alg=None,
    ):
        self.tspans = tspans
        self.lows = lows
        self.highs = highs
        self.polygons = {} if polygons is None else polygons
        self.alg = alg

    def keys(self):
        return (
            "tspans",
            "lows",
            "highs",
            "polygons",
            "alg",
        )

    def __len__(self) -> int:
        return self.tspans.shape[0]

    def __getitem__(self, k: int) -> ReachSet:
        return ReachSet(
            set=Hyperrectangle.from_bounds(self.lows[k], self.highs[k]),
            tspan=(float(self.tspans[k, 0]), float(self.tspans[k, 1])),
        )

    def __iter__(self):
        for k in range(len(self)):
            yield self[k]

    @property
    def dim(self) -> int:
        return self.lows.shape[1]

    @property
    def tstart(self) -> float:
        return float(self.tspans[0, 0])

    @property
    def tend(self) -> float:
        return float(self.tspans[-1, 1])

    @property
    def tspan(self) -> tuple[float, float]:
        return (self.tstart, self.tend)

    def interval_hulls(self) -> tuple[Array, Array]:
        """Lower and upper bounds of every reach set, each of shape (n_sets, n)"""
        return self.lows, self.highs

    def find(self, t: float) -> np.ndarray:
        """Indices of the reach sets whose time interval contains t"""
        tspans = np.asarray(self.tspans)
        return np.flatnonzero((tspans[:, 0] <= t) & (t <= tspans[:, 1]))

    def project(self, vars: tuple[int, int]) -> list[np.ndarray]:
        '''
        2-D projection of every reach set for plotting. Variable 0 is time,
        variables 1..n are the state coordinates. A pair of state variables
        without stored polygons falls back to the boxes of the interval hulls.

        Returns:
            One (n_vertices, 2) array of polygon vertices per reach set.
        '''
        if len(vars) != 2:
            raise InvalidParameter(f"Expected two variables to project on, got {vars}.")
        i, j = vars
        for v in (i, j):
            if not 0 <= v <= self.dim:
                raise InvalidParameter(f"Variable {v} out of range; valid variables are 0 (time) to {self.dim}.")
        if i == j:
            raise InvalidParameter(f"Cannot project on the same variable twice, got {vars}.")

        if (i - 1, j - 1) in self.polygons:
            return [np.asarray(p) for p in self.polygons[(i - 1, j - 1)]]
        if (j - 1, i - 1) in self.polygons:
            return [np.asarray(p)[:, ::-1] for p in self.polygons[(j - 1, i - 1)]]

        lows, highs = np.asarray(self.lows), np.asarray(self.highs)
        if i == 0 or j == 0:
            state_var = (j if i == 0 else i) - 1
            boxes = _boxes(np.asarray(self.tspans), np.stack([lows[:, state_var], highs[:, state_var]], axis=1))
            return boxes if i == 0 else [b[:, ::-1] for b in boxes]

        return _boxes(np.stack([lows[:, i - 1], highs[:, i - 1]], axis=1),
                      np.stack([lows[:, j - 1], highs[:, j - 1]], axis=1))

    def __repr__(self):
        return (f"ReachSolution(n_sets={len(self)}, dim={self.dim}, "
                f"tspan=({self.tstart:.6f}, {self.tend:.6f}), alg={self.alg!r})")


def _boxes(x_bounds, y_bounds) -> list[np.ndarray]:
    return [
        np.array([[x_lo, y_lo], [x_hi, y_lo], [x_hi, y_hi], [x_lo, y_hi]])
        for (x_lo, x_hi), (y_lo, y_hi) in zip(x_bounds, y_bounds)
    ]


def _tree_flatten(obj: ReachSolution):
    leaves = (
        obj.tspans,
        obj.lows,
        obj.highs,
        obj.polygons,
    )
    return leaves, obj.alg


def _tree_unflatten(aux_data, leaves):
    (
        tspans,
        lows,
        highs,
        polygons,
    ) = leaves

    return ReachSolution(
        tspans=tspans,
        lows=lows,
        highs=highs,
        polygons=polygons,
        alg=aux_data,
    )


tree_util.register_pytree_node(ReachSolution, _tree_flatten, _tree_unflatten)
