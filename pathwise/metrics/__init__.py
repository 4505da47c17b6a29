from pathwise.metrics.collector import ProjectStats, ProjectStatsCollector

__all__ = ["ProjectStats", "ProjectStatsCollector"]
