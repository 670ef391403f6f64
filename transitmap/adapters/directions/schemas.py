"""Wire schemas for the Google Directions JSON response.

Only the fields the renderer reads are declared; everything else in the
payload is ignored. Validation failures become MalformedResponseError,
so a missing coordinate never silently turns into 0.0.
"""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ...domain.errors import MalformedResponseError, MissingRouteError, TransportError
from ...domain.models import (
    Bounds,
    Color,
    DirectionsResponse,
    GeoLocation,
    Leg,
    Route,
    RouteStep,
    TravelMode,
)

NO_ROUTE_STATUSES = frozenset({"ZERO_RESULTS", "NOT_FOUND"})


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore")


class LatLngPayload(_Payload):
    lat: float
    lng: float

    def to_domain(self) -> GeoLocation:
        return GeoLocation(latitude=self.lat, longitude=self.lng)


class BoundsPayload(_Payload):
    northeast: LatLngPayload
    southwest: LatLngPayload


class PolylinePayload(_Payload):
    points: str


class TransitLinePayload(_Payload):
    name: Optional[str] = None
    short_name: Optional[str] = None
    color: Optional[str] = None


class TransitDetailsPayload(_Payload):
    line: Optional[TransitLinePayload] = None
    headsign: Optional[str] = None


class StepPayload(_Payload):
    start_location: LatLngPayload
    end_location: LatLngPayload
    polyline: PolylinePayload
    travel_mode: str
    html_instructions: str = ""
    transit_details: Optional[TransitDetailsPayload] = None


class LegPayload(_Payload):
    steps: List[StepPayload] = Field(default_factory=list)
    start_address: str = ""
    end_address: str = ""


class RoutePayload(_Payload):
    bounds: BoundsPayload
    legs: List[LegPayload] = Field(min_length=1)
    overview_polyline: Optional[PolylinePayload] = None
    summary: str = ""


class DirectionsPayload(_Payload):
    status: str
    routes: List[RoutePayload] = Field(default_factory=list)
    error_message: Optional[str] = None


def _field_path(error: ValidationError) -> str:
    errors = error.errors()
    if not errors:
        return ""
    return ".".join(str(part) for part in errors[0]["loc"])


def _step_to_domain(step: StepPayload, path: str) -> RouteStep:
    mode = TravelMode.from_api(step.travel_mode)
    line = step.transit_details.line if step.transit_details else None

    color: Optional[Color] = None
    if line is not None and line.color:
        color = Color.from_hex(line.color, field_path=f"{path}.transit_details.line.color")

    return RouteStep(
        start=step.start_location.to_domain(),
        end=step.end_location.to_domain(),
        polyline=step.polyline.points,
        travel_mode=mode,
        line_color=color,
        line_name=(line.short_name or line.name) if line is not None else None,
        instructions=step.html_instructions,
    )


def _route_to_domain(route: RoutePayload, path: str) -> Route:
    legs = []
    for leg_index, leg in enumerate(route.legs):
        leg_path = f"{path}.legs.{leg_index}"
        steps = tuple(
            _step_to_domain(step, f"{leg_path}.steps.{step_index}")
            for step_index, step in enumerate(leg.steps)
        )
        legs.append(
            Leg(steps=steps, start_address=leg.start_address, end_address=leg.end_address)
        )

    return Route(
        bounds=Bounds(
            northeast=route.bounds.northeast.to_domain(),
            southwest=route.bounds.southwest.to_domain(),
        ),
        legs=tuple(legs),
        overview_polyline=route.overview_polyline.points if route.overview_polyline else "",
        summary=route.summary,
    )


def parse_directions_payload(payload: Any, url: str = "") -> DirectionsResponse:
    """Validate a decoded JSON payload and convert it to domain models.

    Args:
        payload: The decoded JSON body.
        url: Endpoint the payload came from, for error context.

    Returns:
        A DirectionsResponse with at least one route.

    Raises:
        MalformedResponseError: The payload does not match the schema.
        MissingRouteError: The service reported no route.
        TransportError: The service answered with a non-OK status.
    """
    try:
        document = DirectionsPayload.model_validate(payload)
    except ValidationError as e:
        raise MalformedResponseError(
            "Directions response does not match the expected schema",
            field_path=_field_path(e),
            cause=e,
        )

    if document.status in NO_ROUTE_STATUSES:
        raise MissingRouteError(
            f"No route found ({document.status})",
            api_status=document.status,
        )
    if document.status != "OK":
        raise TransportError(
            document.error_message or f"Directions API returned {document.status}",
            api_status=document.status,
            url=url,
        )
    if not document.routes:
        raise MissingRouteError("Directions response has no route", api_status=document.status)

    try:
        routes = tuple(
            _route_to_domain(route, f"routes.{index}")
            for index, route in enumerate(document.routes)
        )
    except ValueError as e:
        # Out-of-range coordinates.
        raise MalformedResponseError(
            "Directions response holds invalid coordinates",
            cause=e,
        )

    return DirectionsResponse(routes=routes, status=document.status)
