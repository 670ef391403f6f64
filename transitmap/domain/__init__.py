"""Domain layer - Core models and errors.

This module contains immutable domain models and typed errors
used throughout the application. No external dependencies.
"""

from .errors import (
    ConfigurationError,
    FetchError,
    MalformedResponseError,
    MissingRouteError,
    RenderingError,
    TransitMapError,
    TransportError,
)
from .models import (
    DEFAULT_ROUTE_COLOR,
    WALKING_COLOR,
    WHITE,
    Bounds,
    Color,
    DirectionsQuery,
    DirectionsResponse,
    EdgeInsets,
    FetchResult,
    GeoLocation,
    IconShape,
    Leg,
    MarkerIcon,
    MarkerOverlay,
    PathStyle,
    PolylineOverlay,
    RenderPlan,
    Route,
    RouteStep,
    StepOverlays,
    TravelMode,
)
from .places import KnownPlace, default_query

__all__ = [
    # Models
    "GeoLocation",
    "Bounds",
    "Color",
    "WALKING_COLOR",
    "DEFAULT_ROUTE_COLOR",
    "WHITE",
    "TravelMode",
    "DirectionsQuery",
    "RouteStep",
    "Leg",
    "Route",
    "DirectionsResponse",
    "FetchResult",
    "PathStyle",
    "IconShape",
    "MarkerIcon",
    "EdgeInsets",
    "PolylineOverlay",
    "MarkerOverlay",
    "StepOverlays",
    "RenderPlan",
    # Places
    "KnownPlace",
    "default_query",
    # Errors
    "TransitMapError",
    "FetchError",
    "TransportError",
    "MalformedResponseError",
    "MissingRouteError",
    "ConfigurationError",
    "RenderingError",
]
