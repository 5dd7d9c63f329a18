from gridstep.core.types import Cell, CellKind, Grid, GridError, NoPathError, Status, StepResult
from gridstep.core.state import Phase, SearchState
from gridstep.core.metrics import MetricsRecorder, MetricsSnapshot
from gridstep.core.path import path_cost, reconstruct_path
from gridstep.core.stepper import StepEngine, run_to_completion
from gridstep.core.bfs import BfsAlgo
from gridstep.core.dijkstra import DijkstraAlgo
from gridstep.core.astar import AStarAlgo
from gridstep.core.algorithms import ALGORITHMS, make_algo
from gridstep.core.maps import MapFormatError, grid_from_dict, grid_to_dict, load_map, random_grid
