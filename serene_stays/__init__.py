"""Serene Stays - room booking backend.

A thin REST layer over three MongoDB collections:
- rooms: browsable inventory with an overwritable `Availability` field
- bookings: per-user reservations, listed only to their owner
- users: registration records, exposed as a public projection

Authentication is a stateless JWT carried in an httpOnly cookie.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
