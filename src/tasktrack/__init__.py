"""tasktrack - task and project tracker with pluggable storage backends."""

__version__ = "1.0.0"
