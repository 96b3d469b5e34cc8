"""qrstudio render engine."""

from qrstudio.engine.registry import stage, get_registry
from qrstudio.engine.context import GenerationContext
from qrstudio.engine.pipeline import Pipeline
from qrstudio.engine.generator import GenerationResult, QrGenerator

__all__ = [
    "stage",
    "get_registry",
    "GenerationContext",
    "Pipeline",
    "GenerationResult",
    "QrGenerator",
]
