from .connection_stats import ConnectionStatsReporter

__all__ = ["ConnectionStatsReporter"]
