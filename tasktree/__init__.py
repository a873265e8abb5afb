"""tasktree: a plain-text task tracker that keeps one markdown file per task."""

__version__ = "0.1.0"
