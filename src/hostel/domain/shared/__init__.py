"""Shared domain building blocks (exceptions, time helpers)."""
