#Marks directions as a package.
#Re-exports the public API so callers can do:
#from directions import DirectionsBuilder, Coordinate
#No business logic.

import logging

from .builder import DirectionsBuilder, build_route_params
from .call import CallState, DirectionsCallback, FunctionCallback, PendingCall
from .client import DirectionsRequest
from .descriptor import RequestDescriptor, format_coordinates, format_radiuses, to_descriptor
from .errors import (
    CallCancelledError,
    CallStateError,
    DirectionsError,
    TransportError,
    ValidationError,
)
from .models import DEFAULT_USER, Coordinate, GeometryFormat, Overview, Profile, RouteRequestParams
from .settings import SDK_VERSION, ClientSettings, default_settings
from .transport import DirectionsResponse, HttpTransport

__version__ = SDK_VERSION

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "DirectionsBuilder",
    "build_route_params",
    "DirectionsRequest",
    "PendingCall",
    "CallState",
    "DirectionsCallback",
    "FunctionCallback",
    "RequestDescriptor",
    "format_coordinates",
    "format_radiuses",
    "to_descriptor",
    "DirectionsError",
    "ValidationError",
    "TransportError",
    "CallCancelledError",
    "CallStateError",
    "DEFAULT_USER",
    "Coordinate",
    "GeometryFormat",
    "Overview",
    "Profile",
    "RouteRequestParams",
    "ClientSettings",
    "default_settings",
    "DirectionsResponse",
    "HttpTransport",
]
