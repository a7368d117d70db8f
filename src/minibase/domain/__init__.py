"""Domain layer: entities, errors and store services."""
