"""
bookingslots - bookable meeting slots from weekly availability templates.
"""

__version__ = "0.1.0"
