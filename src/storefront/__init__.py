"""Storefront API.

E-commerce backend exposing product and coupon endpoints over a relational
store, with product images hosted on Cloudinary, plus an admin console.
"""

__version__ = "0.1.0"
