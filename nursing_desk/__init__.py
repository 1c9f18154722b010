"""Nursing Desk - scheduling and visit records for a small nursing practice."""

__version__ = "0.1.0"
