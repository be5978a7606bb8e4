"""Shopfront catalog browser: catalog state, filtering and view-model preparation."""

__version__ = "1.0.0"
