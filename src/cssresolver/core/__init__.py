"""Resolution-and-rewrite pipeline components."""
