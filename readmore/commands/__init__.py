"""CLI commands for readmore."""
