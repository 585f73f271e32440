"""Storefront cart: catalog, cart, pricing and checkout resolution"""

__version__ = "1.0.0"
