"""Kernel – errors, roles and clock shared by every layer."""
