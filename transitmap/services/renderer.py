"""Route renderer - draws a directions response onto a map surface.

Rendering is split in two:
1. ``plan`` decodes every step and decides its styling, without side
   effects. A malformed step fails here, before the surface is touched.
2. ``render`` clears the surface, issues one viewport fit and adds the
   planned overlays in step order.

Styling per travel mode:
- WALKING: dashed dark gray path, outlined start / filled end icons, z 0
- TRANSIT: solid path and ring icons in the line color, z 1
- anything else: solid default blue path and ring icons, z 0
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

import polyline

from ..config import MapConfig, get_config
from ..domain.errors import MalformedResponseError
from ..domain.models import (
    DEFAULT_ROUTE_COLOR,
    WALKING_COLOR,
    DirectionsResponse,
    EdgeInsets,
    GeoLocation,
    IconShape,
    MarkerIcon,
    MarkerOverlay,
    PathStyle,
    PolylineOverlay,
    RenderPlan,
    RouteStep,
    StepOverlays,
    TravelMode,
)
from ..ports.surface import MapSurfacePort

WALKING_Z_INDEX = 0
TRANSIT_Z_INDEX = 1
MIN_PATH_POINTS = 2


def decode_path(encoded: str, field_path: str = "") -> tuple[GeoLocation, ...]:
    """Decode an encoded polyline into coordinates.

    Raises:
        MalformedResponseError: If the string is not a valid polyline or
            holds fewer than two points.
    """
    try:
        points = polyline.decode(encoded)
        path = tuple(GeoLocation(latitude=lat, longitude=lng) for lat, lng in points)
    except (IndexError, TypeError, ValueError) as e:
        raise MalformedResponseError(
            "Invalid encoded polyline",
            field_path=field_path,
            cause=e,
        )

    if len(path) < MIN_PATH_POINTS:
        raise MalformedResponseError(
            f"Encoded polyline has {len(path)} point(s), a path needs {MIN_PATH_POINTS}",
            field_path=field_path,
        )
    return path


@dataclass(frozen=True)
class StepStyle:
    """Styling chosen for one step from its travel mode."""

    path: PathStyle
    start_icon: MarkerIcon
    end_icon: MarkerIcon
    z_index: int


@dataclass
class RouteRenderer:
    """Render the first route of a directions response.

    Attributes:
        config: Map configuration (stroke width, dash length, padding)
    """

    config: MapConfig = field(default_factory=lambda: get_config().map)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def style_for(self, step: RouteStep) -> StepStyle:
        """Decide path and icon styling from the step's own travel mode."""
        width = self.config.stroke_width

        if step.travel_mode is TravelMode.WALKING:
            dash = self.config.dash_length
            return StepStyle(
                path=PathStyle(color=WALKING_COLOR, width=width, dash_pattern=(dash, dash)),
                start_icon=MarkerIcon(IconShape.OUTLINED_CIRCLE, WALKING_COLOR),
                end_icon=MarkerIcon(IconShape.FILLED_CIRCLE, WALKING_COLOR),
                z_index=WALKING_Z_INDEX,
            )

        if step.travel_mode is TravelMode.TRANSIT:
            color = step.line_color or DEFAULT_ROUTE_COLOR
            ring = MarkerIcon(IconShape.RING, color)
            return StepStyle(
                path=PathStyle(color=color, width=width),
                start_icon=ring,
                end_icon=ring,
                z_index=TRANSIT_Z_INDEX,
            )

        ring = MarkerIcon(IconShape.RING, DEFAULT_ROUTE_COLOR)
        return StepStyle(
            path=PathStyle(color=DEFAULT_ROUTE_COLOR, width=width),
            start_icon=ring,
            end_icon=ring,
            z_index=WALKING_Z_INDEX,
        )

    def insets_for(self, viewport_height: float) -> EdgeInsets:
        """Fixed side padding; the bottom half stays free for controls."""
        padding = self.config.edge_padding
        return EdgeInsets(
            top=padding,
            left=padding,
            bottom=viewport_height / 2,
            right=padding,
        )

    def plan(self, response: DirectionsResponse, viewport_height: float) -> RenderPlan:
        """Build the overlays for the first route of a response.

        Args:
            response: The parsed directions response.
            viewport_height: Height of the target display.

        Returns:
            The render plan.

        Raises:
            MissingRouteError: If the response has no route.
            MalformedResponseError: If a step polyline does not decode to a path.
        """
        route = response.primary_route

        overview: Optional[PolylineOverlay] = None
        if self.config.show_overview and route.overview_polyline:
            overview = PolylineOverlay(
                path=decode_path(route.overview_polyline, "routes.0.overview_polyline"),
                style=PathStyle(color=DEFAULT_ROUTE_COLOR, width=self.config.stroke_width),
            )

        steps: list[StepOverlays] = []
        for index, step in enumerate(route.steps):
            style = self.style_for(step)
            path = decode_path(step.polyline, f"routes.0.legs.0.steps.{index}.polyline")
            title = step.instructions or None

            steps.append(
                StepOverlays(
                    path=PolylineOverlay(path=path, style=style.path),
                    start_marker=MarkerOverlay(
                        position=step.start,
                        icon=style.start_icon,
                        z_index=style.z_index,
                        title=title,
                    ),
                    end_marker=MarkerOverlay(
                        position=step.end,
                        icon=style.end_icon,
                        z_index=style.z_index,
                        title=title,
                    ),
                )
            )

        return RenderPlan(
            bounds=route.bounds,
            insets=self.insets_for(viewport_height),
            steps=tuple(steps),
            overview=overview,
        )

    def render(self, response: DirectionsResponse, surface: MapSurfacePort) -> None:
        """Replace everything on the surface with the response's first route.

        Raises:
            MissingRouteError: If the response has no route.
            MalformedResponseError: If a step polyline does not decode to a path.
            RenderingError: If the surface fails to draw an overlay.
        """
        plan = self.plan(response, surface.viewport_height)

        surface.clear()
        surface.fit_bounds(plan.bounds, plan.insets)
        if plan.overview is not None:
            surface.add_polyline(plan.overview)
        for step in plan.steps:
            surface.add_polyline(step.path)
            surface.add_marker(step.start_marker)
            surface.add_marker(step.end_marker)

        self._logger.info(
            "Route rendered",
            extra={
                "steps": len(plan.steps),
                "overlays": plan.overlay_count,
            },
        )
