"""Configuration for readmore: constants and environment-driven settings."""
