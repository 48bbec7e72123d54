"""
Analysis orchestration — remote classification with local fallback.
"""

from threatlens.orchestrator.orchestrator import AnalysisOrchestrator

__all__ = ["AnalysisOrchestrator"]
