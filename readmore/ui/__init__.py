"""Terminal UI for readmore."""
