"""Core board models and state tracking."""
