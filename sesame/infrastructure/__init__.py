"""Adapters for the database and the Lightning node."""
