"""Command-line runner for the workout engine."""
