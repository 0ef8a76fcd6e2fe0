"""Priority planner: time-horizon task buckets, goals and a focus timer."""

__version__ = "0.1.0"
