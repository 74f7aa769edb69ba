"""Shared infrastructure: constants, tolerances, configuration and errors."""
