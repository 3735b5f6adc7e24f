# constants.py
from enum import Enum, auto

class Precision(Enum):
    SINGLE = auto()
    DOUBLE = auto()

DEFAULT_PERIOD = 0.5
DEFAULT_AMPLITUDE = 1.0

STEP_SIZE_FACTOR_MIN = 0.001
STEP_SIZE_FACTOR_MAX = 0.1
STEP_SIZE_FACTOR_STEP = 0.01
DEFAULT_STEP_SIZE_FACTOR = 0.051  # initial slider position

DEFAULT_APPROX_MODEL = "LGG"

N_SIMULATION_TIME_STEPS = 200
N_SIMULATION_SAMPLES = 10

PLOT_GRID = True
