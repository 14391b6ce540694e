"""Quadboard Stage: anonymous campus forum backend."""

__version__ = "0.1.0"
