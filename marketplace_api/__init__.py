"""
Marketplace API: listings, accounts, favorites and image uploads.
"""

__version__ = "1.0.0"
