"""Application bootstrap."""
