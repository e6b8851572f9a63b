"""tasker - project boards with ordered columns and tasks."""

__version__ = "0.1.0"
