"""Command-line interface for the in-files cache."""
