"""Per-hand reductions of a node and their visual encoding."""
