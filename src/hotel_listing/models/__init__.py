"""
Single import point for all ORM models, so every table is registered on
`Base.metadata` as soon as `hotel_listing.models` is imported.

    from hotel_listing.models import Country, Hotel
"""

from .country import Country
from .hotel import Hotel

__all__ = [
    "Country",
    "Hotel",
]
