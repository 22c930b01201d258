"""Binnacle server - game catalog API with a TTL query cache."""

__version__ = "0.1.0"
