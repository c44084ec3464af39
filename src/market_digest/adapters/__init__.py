"""Adapters around the core domain."""
