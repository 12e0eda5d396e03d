"""Solution package version conflict analyzer."""

__version__ = "0.1.0"
