"""Command-line interface for seedsql."""
