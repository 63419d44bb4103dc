"""
Core data models for rental listing data.

This module defines the standard data structures used throughout
the package for representing listings and their coordinates.
"""

from collections.abc import Mapping
from typing import Any, NamedTuple, Optional


class Coordinate(NamedTuple):
    """
    An immutable (latitude, longitude) pair in decimal degrees.
    """
    latitude: float
    longitude: float


class Property:
    """
    Representation of a single rental listing.

    Latitude, longitude and rent per square foot are optional. A missing
    value is ``None``; no sentinel number is ever substituted for it.
    """

    def __init__(self, latitude=None, longitude=None, rent_per_sqft=None,
                 address=None, rent=None, beds=None, baths=None,
                 age_of_listing_in_days=None, location=None, city=None):
        """
        Initialize a Property.

        Parameters
        ----------
        latitude : float, optional
            Latitude in decimal degrees
        longitude : float, optional
            Longitude in decimal degrees
        rent_per_sqft : float, optional
            Rent divided by floor area
        address : str, optional
            Street address of the listing
        rent : float, optional
            Yearly rent
        beds : int, optional
            Number of bedrooms
        baths : int, optional
            Number of bathrooms
        age_of_listing_in_days : int, optional
            Days since the listing was published
        location : str, optional
            Neighbourhood or community name
        city : str, optional
            City name
        """
        self.latitude = latitude
        self.longitude = longitude
        self.rent_per_sqft = rent_per_sqft
        self.address = address
        self.rent = rent
        self.beds = beds
        self.baths = baths
        self.age_of_listing_in_days = age_of_listing_in_days
        self.location = location
        self.city = city

    @property
    def coordinate(self) -> Optional[Coordinate]:
        """Coordinate of the listing, or None if either component is missing."""
        if self.latitude is None or self.longitude is None:
            return None
        return Coordinate(float(self.latitude), float(self.longitude))

    @property
    def has_coordinate(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def to_dict(self) -> dict:
        """
        Convert the listing to a plain dictionary.

        Returns
        -------
        dict
            Mapping of field name to value
        """
        return {
            'address': self.address,
            'rent': self.rent,
            'beds': self.beds,
            'baths': self.baths,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'rent_per_sqft': self.rent_per_sqft,
            'age_of_listing_in_days': self.age_of_listing_in_days,
            'location': self.location,
            'city': self.city,
        }

    def __repr__(self):
        return f"Property(lat={self.latitude}, lon={self.longitude}, rent_per_sqft={self.rent_per_sqft})"


def record_coordinate(record: Any) -> Optional[Coordinate]:
    """
    Extract a coordinate from a listing-like record.

    Parameters
    ----------
    record : Property, mapping or object
        Anything exposing ``latitude`` and ``longitude`` as attributes
        or as mapping keys

    Returns
    -------
    Coordinate or None
        The coordinate, or None if either component is absent
    """
    if isinstance(record, Mapping):
        latitude = record.get('latitude')
        longitude = record.get('longitude')
    else:
        latitude = getattr(record, 'latitude', None)
        longitude = getattr(record, 'longitude', None)

    if latitude is None or longitude is None:
        return None
    return Coordinate(float(latitude), float(longitude))


__all__ = ['Coordinate', 'Property', 'record_coordinate']
