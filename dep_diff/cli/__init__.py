"""Command line interface for DepDiff."""
