"""Immutable domain models for the transit map.

All models are frozen dataclasses with slots. They carry no external
dependencies and cover both sides of a render pass: the directions
records read from the web API and the overlays placed on the map.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .errors import MalformedResponseError, MissingRouteError, TransitMapError

_HEX_COLOR = re.compile(r"#?([0-9a-fA-F]{6})")


class TravelMode(str, Enum):
    """Travel mode of a query or of a single route step."""

    WALKING = "WALKING"
    TRANSIT = "TRANSIT"
    DRIVING = "DRIVING"
    BICYCLING = "BICYCLING"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_api(cls, value: str) -> TravelMode:
        """Map an API ``travel_mode`` value, unknown values to UNKNOWN."""
        try:
            return cls(value.strip().upper())
        except ValueError:
            return cls.UNKNOWN

    @property
    def api_value(self) -> str:
        """Lower-case form used as the ``mode`` request parameter."""
        return self.value.lower()


class IconShape(Enum):
    """Marker icon variants."""

    RING = "ring"
    OUTLINED_CIRCLE = "outlined_circle"
    FILLED_CIRCLE = "filled_circle"


@dataclass(frozen=True, slots=True)
class GeoLocation:
    """GPS coordinates representing a geographic location."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        """Validate coordinate ranges."""
        if not -90 <= self.latitude <= 90:
            raise ValueError(
                f"Latitude must be between -90 and 90, got {self.latitude}"
            )
        if not -180 <= self.longitude <= 180:
            raise ValueError(
                f"Longitude must be between -180 and 180, got {self.longitude}"
            )

    def as_pair(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)


@dataclass(frozen=True, slots=True)
class Bounds:
    """Bounding box given by its northeast and southwest corners."""

    northeast: GeoLocation
    southwest: GeoLocation


@dataclass(frozen=True, slots=True)
class Color:
    """RGB color with channels normalized to [0, 1]."""

    red: float
    green: float
    blue: float

    def __post_init__(self) -> None:
        for name in ("red", "green", "blue"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"Channel {name} must be within [0, 1], got {value}")

    @classmethod
    def from_hex(cls, value: str, field_path: str = "") -> Color:
        """Parse a ``#RRGGBB`` string (leading ``#`` optional).

        Raises:
            MalformedResponseError: If the string is not six hex digits.
        """
        match = _HEX_COLOR.fullmatch(value.strip()) if isinstance(value, str) else None
        if match is None:
            raise MalformedResponseError(
                f"Invalid hex color {value!r}",
                field_path=field_path,
            )
        digits = match.group(1)
        return cls(
            red=int(digits[0:2], 16) / 255,
            green=int(digits[2:4], 16) / 255,
            blue=int(digits[4:6], 16) / 255,
        )

    def to_rgb255(self) -> tuple[int, int, int]:
        return (
            round(self.red * 255),
            round(self.green * 255),
            round(self.blue * 255),
        )

    def to_hex(self) -> str:
        """Return the color as an upper-case ``#RRGGBB`` string."""
        return "#{:02X}{:02X}{:02X}".format(*self.to_rgb255())


# Dark gray used for walking paths and icons.
WALKING_COLOR = Color.from_hex("#555555")
# Route blue used when a step carries no color of its own.
DEFAULT_ROUTE_COLOR = Color.from_hex("#0000FF")
WHITE = Color.from_hex("#FFFFFF")


@dataclass(frozen=True, slots=True)
class DirectionsQuery:
    """A single directions request.

    Attributes:
        origin: Place identifier of the origin (e.g. 'place_id:ChIJ...')
        destination: Place identifier of the destination
        mode: Travel mode requested from the service
        alternatives: Whether alternative routes are requested
    """

    origin: str
    destination: str
    mode: TravelMode = TravelMode.TRANSIT
    alternatives: bool = True

    def __post_init__(self) -> None:
        if not self.origin or not self.origin.strip():
            raise ValueError("origin must be a non-empty place identifier")
        if not self.destination or not self.destination.strip():
            raise ValueError("destination must be a non-empty place identifier")
        if self.mode is TravelMode.UNKNOWN:
            raise ValueError("mode must be a known travel mode")

    def to_params(self, api_key: str) -> dict[str, str]:
        """Build the query-string parameters for the directions endpoint."""
        params = {
            "origin": self.origin,
            "destination": self.destination,
            "mode": self.mode.api_value,
        }
        if self.alternatives:
            params["alternatives"] = "true"
        params["key"] = api_key
        return params


@dataclass(frozen=True, slots=True)
class RouteStep:
    """One segment of a route leg.

    Attributes:
        start: Start coordinate of the step
        end: End coordinate of the step
        polyline: Encoded polyline of the step path
        travel_mode: How this step is travelled
        line_color: Published line color for transit steps, if any
        line_name: Short name of the transit line, if any
        instructions: HTML instructions from the service
    """

    start: GeoLocation
    end: GeoLocation
    polyline: str
    travel_mode: TravelMode
    line_color: Optional[Color] = None
    line_name: Optional[str] = None
    instructions: str = ""


@dataclass(frozen=True, slots=True)
class Leg:
    """A leg of a route, from one waypoint to the next."""

    steps: tuple[RouteStep, ...] = field(default_factory=tuple)
    start_address: str = ""
    end_address: str = ""


@dataclass(frozen=True, slots=True)
class Route:
    """A route returned by the directions service.

    Attributes:
        bounds: Viewport bounding box of the route
        legs: Legs of the route (one without waypoints)
        overview_polyline: Encoded polyline of the whole route
        summary: Short textual description
    """

    bounds: Bounds
    legs: tuple[Leg, ...] = field(default_factory=tuple)
    overview_polyline: str = ""
    summary: str = ""

    @property
    def steps(self) -> tuple[RouteStep, ...]:
        """Steps of the first leg."""
        if not self.legs:
            return ()
        return self.legs[0].steps


@dataclass(frozen=True, slots=True)
class DirectionsResponse:
    """Parsed directions response.

    Attributes:
        routes: Routes in the order returned by the service
        status: API status string (``OK`` for a parsed response)
    """

    routes: tuple[Route, ...] = field(default_factory=tuple)
    status: str = "OK"

    @property
    def primary_route(self) -> Route:
        """Return the first route or fail with MissingRouteError."""
        if not self.routes:
            raise MissingRouteError("Directions response has no route", api_status=self.status)
        return self.routes[0]


@dataclass(frozen=True, slots=True)
class FetchResult:
    """Outcome of a single fetch: exactly one of response or error."""

    response: Optional[DirectionsResponse] = None
    error: Optional[TransitMapError] = None

    def __post_init__(self) -> None:
        if (self.response is None) == (self.error is None):
            raise ValueError("FetchResult needs exactly one of response or error")

    @classmethod
    def success(cls, response: DirectionsResponse) -> FetchResult:
        return cls(response=response)

    @classmethod
    def failure(cls, error: TransitMapError) -> FetchResult:
        return cls(error=error)

    @property
    def is_success(self) -> bool:
        return self.error is None


@dataclass(frozen=True, slots=True)
class PathStyle:
    """Stroke style of a path overlay.

    Attributes:
        color: Stroke color
        width: Stroke width in screen units
        dash_pattern: Alternating (visible, transparent) lengths; empty for solid
    """

    color: Color
    width: float = 5.0
    dash_pattern: tuple[float, ...] = ()

    @property
    def is_dashed(self) -> bool:
        return len(self.dash_pattern) > 0


@dataclass(frozen=True, slots=True)
class MarkerIcon:
    """Circular marker icon.

    A RING is a white disc with a colored border, OUTLINED_CIRCLE the
    same in a neutral color, FILLED_CIRCLE a solid disc.
    """

    shape: IconShape
    color: Color
    size: int = 20
    border_width: int = 5

    @property
    def fill_color(self) -> Color:
        if self.shape is IconShape.FILLED_CIRCLE:
            return self.color
        return WHITE


@dataclass(frozen=True, slots=True)
class EdgeInsets:
    """Padding kept free around a fitted viewport, in screen units."""

    top: float
    left: float
    bottom: float
    right: float


@dataclass(frozen=True, slots=True)
class PolylineOverlay:
    """A path drawn on the map."""

    path: tuple[GeoLocation, ...]
    style: PathStyle


@dataclass(frozen=True, slots=True)
class MarkerOverlay:
    """A point marker drawn on the map."""

    position: GeoLocation
    icon: MarkerIcon
    z_index: int = 0
    title: Optional[str] = None


@dataclass(frozen=True, slots=True)
class StepOverlays:
    """The path and the start/end markers drawn for one step."""

    path: PolylineOverlay
    start_marker: MarkerOverlay
    end_marker: MarkerOverlay


@dataclass(frozen=True, slots=True)
class RenderPlan:
    """Everything one render pass places on a surface.

    Attributes:
        bounds: Bounding box for the single viewport fit
        insets: Edge insets for the viewport fit
        steps: Overlays per step, in step order
        overview: Optional whole-route path drawn beneath the steps
    """

    bounds: Bounds
    insets: EdgeInsets
    steps: tuple[StepOverlays, ...] = field(default_factory=tuple)
    overview: Optional[PolylineOverlay] = None

    @property
    def polylines(self) -> tuple[PolylineOverlay, ...]:
        paths = tuple(step.path for step in self.steps)
        if self.overview is not None:
            return (self.overview,) + paths
        return paths

    @property
    def markers(self) -> tuple[MarkerOverlay, ...]:
        return tuple(
            marker
            for step in self.steps
            for marker in (step.start_marker, step.end_marker)
        )

    @property
    def overlay_count(self) -> int:
        return len(self.polylines) + len(self.markers)
