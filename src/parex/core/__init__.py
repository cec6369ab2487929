"""Parex core: configuration, logging and the core error taxonomy."""
