"""Tracker bounded context.

Manages users and the tasks they own: identity uniqueness, referential
integrity between tasks and owners, and cascading deletion.
"""
