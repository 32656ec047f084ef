"""Adapters – production implementations of the application ports."""
