"""Hoist - command-line client for hosted applications."""

__version__ = "1.0.0"
