"""Strategy export loading and the decision graph."""
