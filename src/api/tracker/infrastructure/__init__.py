"""Infrastructure layer for Tracker context.

In-memory repository implementations built on the shared EntityStore.
"""
