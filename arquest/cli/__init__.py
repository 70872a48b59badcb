"""Command-line interface for the rules engine."""
