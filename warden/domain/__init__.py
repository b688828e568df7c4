"""Domain layer: entities, events, policies and the ports adapters implement."""
