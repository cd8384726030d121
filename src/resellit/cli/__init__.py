"""Command line interface for resellit."""
