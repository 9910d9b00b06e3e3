"""Command-line interface for RBI Registry."""
