"""Shared helpers: logging and platform integration."""
