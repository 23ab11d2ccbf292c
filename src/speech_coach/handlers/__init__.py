"""Handler layer exports."""

from .analysis_handler import AnalysisHandler

__all__ = ["AnalysisHandler"]
