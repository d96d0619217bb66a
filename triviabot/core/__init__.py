"""Core infrastructure: configuration, logging, exceptions and the app factory."""
