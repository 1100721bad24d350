"""Hoist CLI commands."""
