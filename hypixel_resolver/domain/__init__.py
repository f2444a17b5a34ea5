"""Domain layer: cache policy, fetch outcomes, records and lookup keys."""
