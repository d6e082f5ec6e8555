"""CLI commands for wave-lift."""

from .cardio import cardio
from .init import init
from .progress import progress
from .serve import serve
from .weights import weights
from .workout import workout

__all__ = [
    "cardio",
    "init",
    "progress",
    "serve",
    "weights",
    "workout",
]
