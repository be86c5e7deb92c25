from .pipeline import DictationPipeline, PipelineContext
from .status import PipelineState, StatusReporter, StatusSnapshot

__all__ = [
    "DictationPipeline",
    "PipelineContext",
    "PipelineState",
    "StatusReporter",
    "StatusSnapshot",
]
