"""HTTP API for Minibase."""
