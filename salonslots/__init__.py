"""
salonslots - bookable appointment slots for a single-calendar salon.
"""

__version__ = "0.1.0"
