"""Company/employee directory with per-department active employee resolution."""

__version__ = "0.1.0"
