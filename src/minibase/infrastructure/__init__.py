"""Infrastructure layer: persistence and HTTP API."""
