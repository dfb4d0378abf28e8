"""Command-line interface for eoe."""
