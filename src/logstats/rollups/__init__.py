"""Frequency tables and the log analyzer."""

from .analyzer import AnalysisNotRunError, LogAnalyzer, PassStats
from .frequency import BucketRangeError, FrequencyTable

__all__ = [
    "AnalysisNotRunError",
    "BucketRangeError",
    "FrequencyTable",
    "LogAnalyzer",
    "PassStats",
]
