"""Orchestrate batch runs and report their outcome to a Teams channel."""

__version__ = "0.1.0"
