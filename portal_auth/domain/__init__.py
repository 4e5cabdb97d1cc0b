"""Domain layer: entities, policies and ports of the authentication core."""
