"""Shared infrastructure: config, settings, errors, results, logging."""
