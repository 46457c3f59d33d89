"""
Purpose: Domain models for the Directions capability.
What it does:
- Defines the Coordinate value type (lon, lat) used on the wire
- Defines enums for the allowed request values:
    Profile = driving | cycling | walking
    GeometryFormat = polyline | geojson | false
    Overview = full | simplified | false
- Defines RouteRequestParams, the frozen snapshot a builder hands to a request object

Rule: No HTTP calls, no validation logic. Models only.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

DEFAULT_USER = "mapbox"


class Profile(str, Enum):
    DRIVING = "driving"
    CYCLING = "cycling"
    WALKING = "walking"


class GeometryFormat(str, Enum):
    """
    Encoding of the returned route geometry.
    POLYLINE is the default because it keeps the response small; decoding it
    into a line is left to the caller.
    """
    POLYLINE = "polyline"
    GEOJSON = "geojson"
    NONE = "false"


class Overview(str, Enum):
    FULL = "full"
    SIMPLIFIED = "simplified"
    NONE = "false"


@dataclass(frozen=True)
class Coordinate:
    """
    A point on the map in the order the service expects it: longitude first.
    """
    longitude: float
    latitude: float

    @classmethod
    def from_lat_lon(cls, lat: float, lon: float) -> Coordinate:
        #most of our callers carry (lat, lon) tuples, flip them here once
        return cls(longitude=lon, latitude=lat)


@dataclass(frozen=True)
class RouteRequestParams:
    """
    Immutable, already validated routing parameters.

    Built by `directions.builder.build_route_params`; optional fields left as
    None are omitted from the request entirely.
    """

    profile: Profile
    coordinates: Tuple[Coordinate, ...]
    access_token: str
    user: str = DEFAULT_USER

    alternatives: Optional[bool] = None
    geometries: GeometryFormat = GeometryFormat.POLYLINE
    overview: Optional[Overview] = None
    radiuses: Optional[Tuple[float, ...]] = None  # in meters, one per coordinate
    steps: Optional[bool] = None
    continue_straight: Optional[bool] = None

    client_app_name: Optional[str] = None
