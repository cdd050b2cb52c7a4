"""Persisted defaults and value tables."""
