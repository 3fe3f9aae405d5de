"""HTTP API for the client register service."""
