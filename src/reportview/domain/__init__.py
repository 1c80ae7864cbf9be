"""Domain layer: events, value objects and exceptions. Stdlib only."""
