"""Persistence layer for Minibase."""
