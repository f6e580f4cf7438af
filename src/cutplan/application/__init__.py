"""Application layer - use cases and orchestration."""

from .commands import OptimizeCutsCommand
from .dtos import OptimizeCutsInput, OptimizeCutsOutput

__all__ = [
    "OptimizeCutsCommand",
    "OptimizeCutsInput",
    "OptimizeCutsOutput",
]
