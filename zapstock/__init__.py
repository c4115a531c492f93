"""Inventory and order tracker for sellers running sales through WhatsApp groups."""

__version__ = "1.0.0"
