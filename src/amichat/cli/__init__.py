"""Command-line interface for amichat."""
