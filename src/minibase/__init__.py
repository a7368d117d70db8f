"""Minibase - a minimal Backend-as-a-Service.

Exposes user accounts and schemaless document collections over HTTP,
backed by a relational store.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
