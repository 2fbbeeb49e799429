"""Pure chart resolution package for vehicleStats.

This package contains deterministic, testable computations that operate on
in-memory records and return DTOs. It must not import Django or perform any
network I/O.
"""

from .resolver import resolve_chart

__all__ = ["resolve_chart"]
