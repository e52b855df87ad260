"""Middleware package for the map generation service."""

from mapgen.middleware.error_handler import error_response, setup_error_handlers

__all__ = [
    "error_response",
    "setup_error_handlers",
]
