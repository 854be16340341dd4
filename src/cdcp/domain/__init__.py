"""Domain layer: aggregates, entities, repository interfaces and services."""
