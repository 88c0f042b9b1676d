"""Command-line runner."""
