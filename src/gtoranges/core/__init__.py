"""Domain types and hand canonicalisation shared by every layer."""
