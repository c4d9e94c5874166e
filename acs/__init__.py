from .config import ACSConfig
from .cost_model import CostModel
from .pheromone import PheromoneField
from .tour_builder import TourBuilder, select_diversified, select_intensified
from .colony import Colony
from .driver import ACSResult, solve
from .report import TraceReport
from .tsp import EXAMPLE_DISTANCES, TSPInstance, load_distance_matrix
from .experiments import run_parameter_sweep, run_repeated_trials
