"""Directory exports."""
