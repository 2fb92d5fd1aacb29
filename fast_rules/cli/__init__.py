"""Command line interface for fast-rules."""
