"""Conversational meeting scheduling service."""

__version__ = "0.3.0"
