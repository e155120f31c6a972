"""ClawdJob: backend of the autonomous job-hunting agent dashboard."""

__version__ = "1.0.0"
