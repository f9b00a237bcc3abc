"""Core services: configuration, logging, validation and upstream access."""
