"""Command-line user interface."""
