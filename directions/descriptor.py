#Purpose: Wire serialization of RouteRequestParams.
#Encapsulates the Directions v5 request format:
#coordinate formatting (lon,lat;lon,lat) in fixed point
#radiuses formatting (r;r;r), omitted when empty
#optional booleans sent as "true"/"false", omitted when unset
#path construction /directions/v5/{user}/{profile}/{coordinates}
#It performs no validation and no network I/O.

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple
from urllib.parse import quote

from .models import Coordinate, RouteRequestParams
from .settings import ClientSettings

DIRECTIONS_PATH = "/directions/v5/{user}/{profile}/{coordinates}"

QueryParams = Tuple[Tuple[str, str], ...]


@dataclass(frozen=True)
class RequestDescriptor:
    """
    Canonical, transport-agnostic description of one Directions request.
    Two descriptors compare equal when they would produce the same HTTP request.
    """

    method: str
    path: str
    params: QueryParams
    headers: Tuple[Tuple[str, str], ...] = ()

    # host and timeout of the request that produced this descriptor;
    # they win over whatever the transport was created with
    base_url: Optional[str] = None
    timeout: Optional[float] = None

    def param(self, name: str) -> Optional[str]:
        for key, value in self.params:
            if key == name:
                return value
        return None

    def url(self, base_url: Optional[str] = None) -> str:
        host = base_url or self.base_url
        if not host:
            raise ValueError("RequestDescriptor has no base_url")
        return host.rstrip("/") + self.path


def format_coordinates(coordinates: Iterable[Coordinate]) -> str:
    """Convert coordinates to the service format 'lon,lat;lon,lat;...'"""
    #%f is locale independent in python, always 6 decimals with a '.'
    return ";".join(f"{c.longitude:f},{c.latitude:f}" for c in coordinates)


def format_radiuses(radiuses: Optional[Sequence[float]]) -> Optional[str]:
    """Convert radiuses to 'r;r;...', or None when there is nothing to send."""
    if not radiuses:
        return None
    return ";".join(f"{radius:f}" for radius in radiuses)


def format_bool(value: Optional[bool]) -> Optional[str]:
    if value is None:
        return None
    return "true" if value else "false"


def build_query(params: RouteRequestParams) -> QueryParams:
    """
    Query parameters in the order the service documents them.
    Anything that serializes to None is dropped instead of sent empty.
    """
    candidates: List[Tuple[str, Optional[str]]] = [
        ("access_token", params.access_token),
        ("alternatives", format_bool(params.alternatives)),
        ("geometries", params.geometries.value if params.geometries is not None else None),
        ("overview", params.overview.value if params.overview is not None else None),
        ("radiuses", format_radiuses(params.radiuses)),
        ("steps", format_bool(params.steps)),
        ("continue_straight", format_bool(params.continue_straight)),
    ]
    return tuple((name, value) for name, value in candidates if value is not None)


def to_descriptor(params: RouteRequestParams, settings: ClientSettings) -> RequestDescriptor:
    path = DIRECTIONS_PATH.format(
        #user is free text, keep it inside its own path segment
        user=quote(params.user, safe=""),
        profile=params.profile.value,
        coordinates=format_coordinates(params.coordinates),
    )
    headers = (("User-Agent", settings.header_user_agent(params.client_app_name)),)

    return RequestDescriptor(
        method="GET",
        path=path,
        params=build_query(params),
        headers=headers,
        base_url=settings.base_url,
        timeout=settings.timeout,
    )
