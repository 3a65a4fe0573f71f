"""Shared models, errors and helpers."""
