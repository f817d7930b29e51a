"""Render template generator for short voice-over videos."""

__version__ = "0.1.0"
