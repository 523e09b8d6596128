"""Command-line interface for Tidy Tools."""
