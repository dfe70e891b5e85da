"""Folio — template-driven PDF report engine."""

__version__ = "0.4.0"
