"""Domain layer for Tracker context."""
