"""Console helpers."""
