"""HTTP API for the map generation service."""
