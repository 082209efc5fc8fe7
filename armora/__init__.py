"""Armora — close-protection officer matching and protection pricing.

Armora scores Close Protection Officers (CPOs) against a principal's
protection request and prices protection bookings across the Essential,
Executive and Shadow service tiers, including time and risk surcharges,
special-requirement add-ons, subscription and duration discounts, and UK VAT.

Both kernels are pure functions over in-memory data; the HTTP API and CLI
wrap them for the booking front end and for operators.
"""

__version__ = "0.1.0"
