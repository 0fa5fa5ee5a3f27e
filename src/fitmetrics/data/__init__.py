"""Loading of exported tracking logs."""

from fitmetrics.data.log_loader import LogLoader, TrackingLogs, load_logs

__all__ = ["LogLoader", "TrackingLogs", "load_logs"]
