"""Todo reminder service: todo lifecycle, in-memory stores and recurring reminder sweeps."""

__version__ = "0.1.0"
