"""
Reachability analysis of the harmonic oscillator u'' + omega^2 u = 0 with omega = 2 pi / T.

The flowpipe over one period is drawn in the (t, u), (t, u') and (u, u') planes
together with the analytic solution. The slider sets the step size factor alpha,
the solver step size being alpha * T.
"""

from __future__ import annotations

import argparse
import matplotlib.pyplot as plt
from matplotlib.widgets import Slider

import oscireach
from oscireach import constants as const


def parse_args():
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--period", type=float, default=const.DEFAULT_PERIOD, help="Oscillation period T.")
    parser.add_argument("--amplitude", type=float, default=const.DEFAULT_AMPLITUDE, help="Initial displacement.")
    parser.add_argument("--alpha", type=float, default=const.DEFAULT_STEP_SIZE_FACTOR, help="Initial step size factor.")
    parser.add_argument("--approx-model", choices=sorted(oscireach.APPROXIMATION_MODELS), default=const.DEFAULT_APPROX_MODEL)
    parser.add_argument("--save", type=str, default=None, help="Save the figure instead of showing the slider.")
    return parser.parse_args()


def main():
    args = parse_args()

    def analyse(alpha):
        config = oscireach.AnalysisConfig(
            period=args.period,
            amplitude=args.amplitude,
            step_size_factor=alpha,
            approx_model=args.approx_model,
        )
        return oscireach.reach_oscillator(config)

    fig, axes = plt.subplots(1, 3, figsize=(15, 5))
    fig.subplots_adjust(bottom=0.22, wspace=0.3)

    problem, solution = analyse(args.alpha)
    oscireach.plot_flowpipes(problem, solution, axes=axes)

    if args.save is not None:
        fig.savefig(args.save, dpi=150, bbox_inches="tight")
        print(f"Saved figure to {args.save}")
        return

    slider_ax = fig.add_axes([0.2, 0.06, 0.6, 0.03])
    slider = Slider(
        slider_ax,
        r"$\alpha$",
        valmin=const.STEP_SIZE_FACTOR_MIN,
        valmax=const.STEP_SIZE_FACTOR_MAX,
        valinit=args.alpha,
        valstep=[const.STEP_SIZE_FACTOR_MIN + k * const.STEP_SIZE_FACTOR_STEP for k in range(10)],
    )

    def update(alpha):
        for ax in axes:
            ax.clear()
        problem, solution = analyse(alpha)
        oscireach.plot_flowpipes(problem, solution, axes=axes)
        fig.canvas.draw_idle()

    slider.on_changed(update)
    plt.show()


if __name__ == "__main__":
    main()
