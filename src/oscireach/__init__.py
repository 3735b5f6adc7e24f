from .reach import solve, reach_oscillator
from .simulate import simulate

from .oscillator.harmonic_oscillator import *
from .oscillator.analytic import *

from .sets.singleton import *
from .sets.hyperrectangle import *

from .system.continuous_system import *
from .system.initial_value_problem import *

from .solver.hylaa_solver import *
from .solver.time_integration_solver import *

from .result.reach_solution import *

from .config import *
from .errors import *

from .utils.plotting import *

from .constants import *

"""
Reachability analysis of the harmonic oscillator: flowpipes computed with Hylaa, validated against the closed-form solution.
"""
