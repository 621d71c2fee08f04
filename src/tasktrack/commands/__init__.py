"""CLI command modules for tasktrack."""
