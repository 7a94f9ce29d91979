"""Command line interface for loosegit."""
