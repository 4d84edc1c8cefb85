"""Ticket checkout API backed by PayPal Orders v2."""

__version__ = "1.0.0"
