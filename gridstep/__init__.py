"""Step-by-step grid search: BFS, Dijkstra and A* that advance one pop per call."""

__version__ = "0.1.0"
