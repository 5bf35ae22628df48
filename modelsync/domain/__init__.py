"""Domain layer - scopes, entities, protocols and errors."""
