"""HTTP API for the transform catalog."""
