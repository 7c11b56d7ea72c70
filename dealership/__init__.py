"""Dealership back-office API: vehicle listings, images and customer inquiries."""

__version__ = "0.1.0"
