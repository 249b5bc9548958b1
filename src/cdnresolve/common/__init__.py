"""Shared helpers used across the specifier, fetching and package layers."""
