"""
Purpose: Fluent builder for Directions v5 requests.
What it does:
- Accumulates routing parameters through chainable setters
- Validates them in one place (build_route_params), before any network I/O
- Freezes them into a RouteRequestParams snapshot and returns a DirectionsRequest

Rule: setters never validate; build() does.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Optional, Sequence, Tuple, Type, TypeVar, Union

from .client import DirectionsRequest
from .errors import ValidationError
from .models import (
    DEFAULT_USER,
    Coordinate,
    GeometryFormat,
    Overview,
    Profile,
    RouteRequestParams,
)
from .settings import ClientSettings, default_settings
from .transport import HttpTransport

logger = logging.getLogger(__name__)

E = TypeVar("E", Profile, GeometryFormat, Overview)


def _as_enum(enum_cls: Type[E], value: Union[str, E], field_name: str) -> E:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(f"Invalid {field_name} {value!r}; expected one of: {allowed}") from None


def build_route_params(
    *,
    coordinates: Optional[Sequence[Coordinate]],
    access_token: Optional[str],
    profile: Union[str, Profile, None] = None,
    user: Optional[str] = DEFAULT_USER,
    alternatives: Optional[bool] = None,
    geometries: Union[str, GeometryFormat] = GeometryFormat.POLYLINE,
    overview: Union[str, Overview, None] = None,
    radiuses: Optional[Sequence[float]] = None,
    steps: Optional[bool] = None,
    continue_straight: Optional[bool] = None,
    client_app_name: Optional[str] = None,
) -> RouteRequestParams:
    """
    Validate raw routing parameters and freeze them.

    Raises:
        ValidationError: missing access token, fewer than two coordinates,
            radiuses not matching the coordinates, or an unknown enum value.
    """
    if not access_token or not access_token.strip():
        raise ValidationError("Using the Directions service requires setting a valid access token.")

    if coordinates is None or len(coordinates) < 2:
        raise ValidationError("You should provide at least two coordinates (from/to).")

    #an empty radiuses list means "no radiuses", same as never setting it
    if radiuses is not None and len(radiuses) == 0:
        radiuses = None

    if radiuses is not None:
        if len(radiuses) != len(coordinates):
            raise ValidationError("There must be as many radiuses as there are coordinates.")
        if any(radius < 0 for radius in radiuses):
            raise ValidationError("Radiuses must be >= 0 meters.")

    if not user:
        raise ValidationError("user must not be empty")

    return RouteRequestParams(
        user=user,
        profile=_as_enum(Profile, profile if profile is not None else Profile.DRIVING, "profile"),
        coordinates=tuple(coordinates),
        access_token=access_token,
        alternatives=alternatives,
        geometries=_as_enum(GeometryFormat, geometries, "geometries"),
        overview=_as_enum(Overview, overview, "overview") if overview is not None else None,
        radiuses=tuple(float(radius) for radius in radiuses) if radiuses is not None else None,
        steps=steps,
        continue_straight=continue_straight,
        client_app_name=client_app_name,
    )


class DirectionsBuilder:
    """
    Directions v5 builder.

    Example:
        request = (
            DirectionsBuilder()
            .set_access_token(token)
            .set_profile("cycling")
            .set_origin(Coordinate(13.388860, 52.517037))
            .set_destination(Coordinate(13.397634, 52.529407))
            .set_steps(True)
            .build()
        )
        response = request.execute_call()
    """

    def __init__(
        self,
        settings: Optional[ClientSettings] = None,
        transport: Optional[HttpTransport] = None,
    ):
        self._settings = settings or default_settings()
        # shared by every request this builder makes; created on first build()
        # when not injected, and then closed by close()
        self._transport = transport
        self._owns_transport = transport is None

        # None means "unset": optional values are only sent when set.
        self._user: Optional[str] = DEFAULT_USER
        self._profile: Union[str, Profile, None] = None
        self._coordinates: Optional[List[Coordinate]] = None
        self._access_token: Optional[str] = None
        self._alternatives: Optional[bool] = None
        # Only polyline by default, to keep the response small.
        self._geometries: Union[str, GeometryFormat] = GeometryFormat.POLYLINE
        self._overview: Union[str, Overview, None] = None
        self._radiuses: Optional[List[float]] = None
        self._steps: Optional[bool] = None
        self._continue_straight: Optional[bool] = None
        self._client_app_name: Optional[str] = None

        # last build, reused while nothing changes
        self._built: Optional[Tuple[RouteRequestParams, ClientSettings, DirectionsRequest]] = None

    #----------------
    # setters
    #----------------
    def set_user(self, user: str) -> DirectionsBuilder:
        self._user = user
        return self

    def set_profile(self, profile: Union[str, Profile]) -> DirectionsBuilder:
        self._profile = profile
        return self

    def set_coordinates(self, coordinates: Sequence[Coordinate]) -> DirectionsBuilder:
        """
        Replace the whole coordinate list. Anything added before with
        set_origin() / set_destination() is dropped.
        """
        self._coordinates = list(coordinates)
        return self

    def set_origin(self, origin: Coordinate) -> DirectionsBuilder:
        """Insert origin at the front; existing coordinates shift right."""
        if self._coordinates is None:
            self._coordinates = []
        self._coordinates.insert(0, origin)
        return self

    def set_destination(self, destination: Coordinate) -> DirectionsBuilder:
        """Append destination at the end of the coordinate list."""
        if self._coordinates is None:
            self._coordinates = []
        self._coordinates.append(destination)
        return self

    def set_access_token(self, access_token: str) -> DirectionsBuilder:
        self._access_token = access_token
        return self

    def set_alternatives(self, alternatives: Optional[bool]) -> DirectionsBuilder:
        self._alternatives = alternatives
        return self

    def set_geometries(self, geometries: Union[str, GeometryFormat]) -> DirectionsBuilder:
        self._geometries = geometries
        return self

    def set_overview(self, overview: Union[str, Overview, None]) -> DirectionsBuilder:
        self._overview = overview
        return self

    def set_radiuses(self, radiuses: Optional[Sequence[float]]) -> DirectionsBuilder:
        self._radiuses = list(radiuses) if radiuses is not None else None
        return self

    def set_steps(self, steps: Optional[bool]) -> DirectionsBuilder:
        self._steps = steps
        return self

    def set_continue_straight(self, continue_straight: Optional[bool]) -> DirectionsBuilder:
        self._continue_straight = continue_straight
        return self

    def set_client_app_name(self, client_app_name: Optional[str]) -> DirectionsBuilder:
        self._client_app_name = client_app_name
        return self

    def set_base_url(self, base_url: str) -> DirectionsBuilder:
        """Point this builder at another service host (tests, self-hosted proxies)."""
        self._settings = replace(self._settings, base_url=base_url)
        return self

    #----------------
    # getters
    #----------------
    @property
    def coordinates(self) -> List[Coordinate]:
        return list(self._coordinates or [])

    @property
    def settings(self) -> ClientSettings:
        return self._settings

    @property
    def transport(self) -> HttpTransport:
        if self._transport is None:
            self._transport = HttpTransport(self._settings)
        return self._transport

    #----------------
    # resources
    #----------------
    def close(self) -> None:
        """Close the transport this builder created. An injected transport is left to its owner."""
        if self._owns_transport and self._transport is not None:
            self._transport.close()
            self._transport = None
        self._built = None

    def __enter__(self) -> DirectionsBuilder:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    #----------------
    # build
    #----------------
    def build(self) -> DirectionsRequest:
        """
        Validate the current parameters and return the request object.

        Building again without changing anything returns the same request
        object, so its underlying call is not set up twice.

        Raises:
            ValidationError: see build_route_params.
        """
        self._settings.validate()
        params = build_route_params(
            user=self._user,
            profile=self._profile,
            coordinates=self._coordinates,
            access_token=self._access_token,
            alternatives=self._alternatives,
            geometries=self._geometries,
            overview=self._overview,
            radiuses=self._radiuses,
            steps=self._steps,
            continue_straight=self._continue_straight,
            client_app_name=self._client_app_name,
        )

        if self._built is not None:
            built_params, built_settings, request = self._built
            if built_params == params and built_settings == self._settings:
                return request

        request = DirectionsRequest(params, settings=self._settings, transport=self.transport)
        self._built = (params, self._settings, request)
        logger.debug(
            f"Built {params.profile.value} request with {len(params.coordinates)} coordinates"
        )
        return request
