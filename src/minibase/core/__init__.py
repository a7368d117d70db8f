"""Core configuration and logging for Minibase."""
