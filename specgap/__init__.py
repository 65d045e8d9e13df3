from .config import AnalysisConfig, load_analysis_config
from .core.pipeline import analyze

__all__ = [
    "AnalysisConfig",
    "load_analysis_config",
    "analyze",
]
