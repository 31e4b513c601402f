"""Shared error, logging and network safety helpers."""
