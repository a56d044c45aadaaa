"""logstats: hourly, daily and monthly access statistics for web server logs."""

from .core.records import InMemoryRecordSource, LogRecord, RecordSource
from .rollups.analyzer import AnalysisNotRunError, LogAnalyzer

__version__ = "0.1.0"

__all__ = [
    "AnalysisNotRunError",
    "InMemoryRecordSource",
    "LogAnalyzer",
    "LogRecord",
    "RecordSource",
    "__version__",
]
