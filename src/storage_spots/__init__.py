"""
Storage Spots rental system

Pricing and allocation engine for a storage-rental facility: a fixed grid of
standard, humidity-controlled and temperature-controlled units, a customer
roster, and monthly billing with a multi-unit discount.
"""

__version__ = "1.0.0"
