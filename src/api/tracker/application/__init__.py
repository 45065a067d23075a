"""Application layer for Tracker bounded context.

Validation, use-case orchestration and the result objects returned to the
presentation layer.
"""
