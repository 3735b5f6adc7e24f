import math

import jax
import numpy as np
import pytest

import oscireach
from oscireach import (
    AnalysisConfig,
    Hyperrectangle,
    HylaaSolver,
    InvalidParameter,
    analytic_derivative,
    analytic_solution,
    sdof,
    solve,
)
from oscireach import constants as const

# LP solutions are exact up to the solver's feasibility tolerance
TOL = 1e-6


def analytic_state(problem, t, **kwargs):
    u = analytic_solution(problem, **kwargs)
    v = analytic_derivative(problem, **kwargs)
    return np.array([float(u(t)), float(v(t))])


def assert_encloses_analytic(problem, solution, n_points=101, tol=TOL):
    low, high = (np.asarray(b) for b in solution.interval_hulls())
    for t in np.linspace(solution.tstart, solution.tend, n_points):
        idx = solution.find(t)
        assert idx.size > 0, f"no reach set covers t={t}"
        x = analytic_state(problem, t)
        for k in idx:
            assert np.all(low[k] - tol <= x) and np.all(x <= high[k] + tol), (
                f"analytic state {x} at t={t} outside reach set {k}: [{low[k]}, {high[k]}]"
            )


@pytest.mark.parametrize("alpha", [0.001, 0.011, 0.051, 0.1])
def test_flowpipe_encloses_analytic_solution(alpha):
    problem = sdof()
    solution = solve(problem.ivp, (0.0, problem.period), alg=HylaaSolver(delta=alpha * problem.period), verbose=False)
    assert_encloses_analytic(problem, solution)


@pytest.mark.parametrize("alpha", [0.011, 0.051, 0.1])
def test_chull_sets_hold_states_at_step_ends(alpha):
    problem = sdof()
    solution = solve(problem.ivp, (0.0, problem.period),
                     alg=HylaaSolver(delta=alpha * problem.period, approx_model="CHULL"), verbose=False)
    low, high = (np.asarray(b) for b in solution.interval_hulls())
    for k, (t_lo, t_hi) in enumerate(np.asarray(solution.tspans)):
        for t in (t_lo, t_lo + solution.alg.delta):
            x = analytic_state(problem, t)
            assert np.all(low[k] - TOL <= x) and np.all(x <= high[k] + TOL)


@pytest.mark.parametrize("alpha", [0.001, 0.011, 0.03, 0.051, 0.1])
def test_number_of_reach_sets_and_time_tiling(alpha):
    problem = sdof()
    delta = alpha * problem.period
    solution = solve(problem.ivp, (0.0, problem.period), alg=HylaaSolver(delta=delta), verbose=False)

    assert len(solution) == math.ceil(round(problem.period / delta, 9))
    tspans = np.asarray(solution.tspans)
    assert tspans[0, 0] == 0.0
    assert tspans[-1, 1] == problem.period
    np.testing.assert_allclose(tspans[1:, 0], tspans[:-1, 1])
    assert np.all(tspans[:, 1] > tspans[:, 0])


def test_shifted_time_span():
    problem = sdof()
    solution = solve(problem.ivp, (1.0, 1.0 + problem.period), alg=HylaaSolver(delta=0.01), verbose=False)
    assert solution.tspan == (1.0, 1.0 + problem.period)
    low, high = solution[0].set.interval_hull()
    assert float(low[0]) <= 1.0 <= float(high[0])


def test_first_reach_set_contains_initial_state():
    problem = sdof()
    solution = solve(problem.ivp, (0.0, problem.period), alg=HylaaSolver(delta=0.01), verbose=False)
    low, high = solution[0].set.interval_hull()
    assert float(low[0]) <= 1.0 <= float(high[0])
    assert float(low[1]) <= 0.0 <= float(high[1])
    assert solution[0].tspan == (0.0, pytest.approx(0.01))


def test_chull_is_not_looser_than_lgg():
    problem = sdof()
    t_span = (0.0, problem.period)
    lgg = solve(problem.ivp, t_span, alg=HylaaSolver(delta=0.02, approx_model="LGG"), verbose=False)
    chull = solve(problem.ivp, t_span, alg=HylaaSolver(delta=0.02, approx_model="CHULL"), verbose=False)
    np.testing.assert_array_less(np.asarray(lgg.lows) - TOL, np.asarray(chull.lows))
    np.testing.assert_array_less(np.asarray(chull.highs), np.asarray(lgg.highs) + TOL)


def test_smaller_step_gives_tighter_flowpipe():
    problem = sdof()
    t_span = (0.0, problem.period)
    coarse = solve(problem.ivp, t_span, alg=HylaaSolver(delta=0.1 * problem.period), verbose=False)
    fine = solve(problem.ivp, t_span, alg=HylaaSolver(delta=0.001 * problem.period), verbose=False)

    def max_width(solution):
        low, high = solution.interval_hulls()
        return float(np.max(np.asarray(high - low)[:, 0]))

    assert max_width(fine) < max_width(coarse)


def test_set_valued_initial_state():
    X0 = Hyperrectangle(center=[1.0, 0.0], radius=[0.1, 0.1])
    problem = sdof(initial_state=X0)
    solution = solve(problem.ivp, (0.0, problem.period), alg=HylaaSolver(delta=0.005), verbose=False)
    corners = [(0.9, -0.1), (0.9, 0.1), (1.1, -0.1), (1.1, 0.1)]
    low, high = (np.asarray(b) for b in solution.interval_hulls())
    for x0, v0 in corners:
        for t in np.linspace(0.0, problem.period, 41):
            x = analytic_state(sdof(), t, x0=x0, v0=v0)
            for k in solution.find(t):
                assert np.all(low[k] - TOL <= x) and np.all(x <= high[k] + TOL)


def test_default_algorithm():
    problem = sdof()
    solution = solve(problem.ivp, (0.0, problem.period), verbose=False)
    assert isinstance(solution.alg, HylaaSolver)
    assert solution.alg.approx_model == const.DEFAULT_APPROX_MODEL
    assert solution.alg.delta == pytest.approx(const.DEFAULT_STEP_SIZE_FACTOR * problem.period)
    assert len(solution) == 20


@pytest.mark.parametrize("t_span", [(0.0, 0.0), (1.0, 0.5), (0.0, float("nan")), (0.0,)])
def test_invalid_time_span(t_span):
    problem = sdof()
    with pytest.raises(InvalidParameter):
        solve(problem.ivp, t_span, alg=HylaaSolver(delta=0.01), verbose=False)


@pytest.mark.parametrize("delta", [0.0, -0.1, float("inf")])
def test_invalid_step_size(delta):
    with pytest.raises(InvalidParameter):
        HylaaSolver(delta=delta)


def test_invalid_approximation_model():
    with pytest.raises(InvalidParameter):
        HylaaSolver(delta=0.01, approx_model="StepIntersect")


def test_second_order_problem_is_rejected():
    ivp = oscireach.second_order_ivp(sdof())
    with pytest.raises(InvalidParameter):
        solve(ivp, (0.0, 0.5), alg=HylaaSolver(delta=0.01), verbose=False)


def test_single_precision():
    problem = sdof()
    solution = solve(problem.ivp, (0.0, problem.period), alg=HylaaSolver(delta=0.01),
                     precision=const.Precision.SINGLE, verbose=False)
    assert solution.lows.dtype == np.float32
    solution = solve(problem.ivp, (0.0, problem.period), alg=HylaaSolver(delta=0.01), verbose=False)
    assert solution.lows.dtype == np.float64


def test_project():
    problem = sdof()
    solution = solve(problem.ivp, (0.0, problem.period), alg=HylaaSolver(delta=0.05), verbose=False)

    rects = solution.project((0, 1))
    assert len(rects) == len(solution)
    assert all(r.shape == (4, 2) for r in rects)
    t_lo, t_hi = np.asarray(solution.tspans[0])
    np.testing.assert_allclose(sorted(set(rects[0][:, 0])), [t_lo, t_hi])

    swapped = solution.project((2, 0))
    np.testing.assert_allclose(swapped[3], solution.project((0, 2))[3][:, ::-1])

    phase = solution.project((1, 2))
    assert len(phase) == len(solution)
    assert all(p.ndim == 2 and p.shape[1] == 2 for p in phase)
    np.testing.assert_allclose(solution.project((2, 1))[0], phase[0][:, ::-1])

    # the phase polygons lie inside the interval hulls
    low, high = (np.asarray(b) for b in solution.interval_hulls())
    for k, polygon in enumerate(phase):
        assert np.all(polygon >= low[k] - TOL) and np.all(polygon <= high[k] + TOL)

    for vars in [(0, 0), (0, 3), (1,), (-1, 1)]:
        with pytest.raises(InvalidParameter):
            solution.project(vars)


def test_project_without_polygons_uses_boxes():
    problem = sdof()
    solution = solve(problem.ivp, (0.0, problem.period), alg=HylaaSolver(delta=0.05), verbose=False)
    boxes = oscireach.ReachSolution(solution.tspans, solution.lows, solution.highs).project((1, 2))
    low, high = (np.asarray(b) for b in solution.interval_hulls())
    np.testing.assert_allclose(boxes[0].min(axis=0), low[0])
    np.testing.assert_allclose(boxes[0].max(axis=0), high[0])


def test_solution_is_a_pytree():
    problem = sdof()
    solution = solve(problem.ivp, (0.0, problem.period), alg=HylaaSolver(delta=0.05), verbose=False)
    leaves = jax.tree_util.tree_leaves(solution)
    assert len(leaves) == 3 + len(solution)
    shifted = jax.tree_util.tree_map(lambda x: x + 1.0, solution)
    assert isinstance(shifted, oscireach.ReachSolution)
    assert shifted.alg is solution.alg
    np.testing.assert_allclose(shifted.polygons[(0, 1)][0], solution.polygons[(0, 1)][0] + 1.0)


def test_analysis_config():
    config = AnalysisConfig()
    assert config.step_size == pytest.approx(const.DEFAULT_STEP_SIZE_FACTOR * const.DEFAULT_PERIOD)
    assert config.t_span == (0.0, const.DEFAULT_PERIOD)

    alg = AnalysisConfig(step_size_factor=0.01, approx_model="CHULL").build_algorithm()
    assert isinstance(alg, HylaaSolver)
    assert alg.approx_model == "CHULL"
    assert alg.delta == pytest.approx(0.01 * const.DEFAULT_PERIOD)


@pytest.mark.parametrize("kwargs", [
    dict(step_size_factor=0.0005),
    dict(step_size_factor=0.2),
    dict(period=0.0),
    dict(approx_model="Backward"),
])
def test_analysis_config_validation(kwargs):
    with pytest.raises(InvalidParameter):
        AnalysisConfig(**kwargs)


def test_reach_oscillator():
    problem, solution = oscireach.reach_oscillator(AnalysisConfig(period=1.0, amplitude=0.5, step_size_factor=0.02), verbose=False)
    assert problem.period == 1.0
    assert len(solution) == 50
    assert solution.tspan == (0.0, 1.0)
    assert_encloses_analytic(problem, solution)
