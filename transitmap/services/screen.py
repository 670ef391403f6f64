"""Transit screen - one fetch, one render, bound to a view's lifetime.

The screen is the asyncio counterpart of a view controller showing
directions on a map:

    screen = TransitScreen(query, fetcher, renderer, surface)
    await screen.appear()      # fetch, then render on the owning loop
    ...
    screen.teardown()          # cancel in-flight fetch, detach surface

States: IDLE -> LOADING -> RENDERED | FAILED, and CLOSED after teardown.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Optional

from ..domain.errors import (
    ConfigurationError,
    MalformedResponseError,
    MissingRouteError,
    RenderingError,
    TransitMapError,
    TransportError,
)
from ..domain.models import DirectionsQuery, FetchResult
from ..ports.surface import MapSurfacePort
from .fetcher import DirectionsFetcher
from .renderer import RouteRenderer
from .surface_handle import SurfaceHandle


class ScreenState(Enum):
    IDLE = "idle"
    LOADING = "loading"
    RENDERED = "rendered"
    FAILED = "failed"
    CLOSED = "closed"


def banner_for(error: TransitMapError) -> str:
    """User-facing message for a failed fetch or render."""
    if isinstance(error, ConfigurationError):
        return "Directions are unavailable: the API key is not configured."
    if isinstance(error, MissingRouteError):
        return "No transit route was found between these places."
    if isinstance(error, MalformedResponseError):
        return "The directions service sent a response that could not be read."
    if isinstance(error, TransportError):
        if error.status_code is not None:
            return f"Could not reach the directions service (HTTP {error.status_code})."
        if error.api_status:
            return f"The directions service refused the request ({error.api_status})."
        return "Could not reach the directions service. Check your connection."
    if isinstance(error, RenderingError):
        return "The route could not be drawn on the map."
    return f"Directions failed: {error.message}"


class TransitScreen:
    """Fetch directions once and draw them on a map surface.

    The surface is held weakly through a SurfaceHandle; the caller owns
    it. Rendering always runs on the event loop the screen appeared on.

    Attributes:
        query: The directions query shown by this screen
        state: Current lifecycle state
        result: The applied fetch result, once one arrived
        error: Typed error of a failed fetch or render, if any
    """

    def __init__(
        self,
        query: DirectionsQuery,
        fetcher: DirectionsFetcher,
        renderer: RouteRenderer,
        surface: MapSurfacePort,
    ) -> None:
        self.query = query
        self.fetcher = fetcher
        self.renderer = renderer
        self.state = ScreenState.IDLE
        self.result: Optional[FetchResult] = None
        self.error: Optional[TransitMapError] = None

        self._handle = SurfaceHandle(surface)
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._task: Optional[asyncio.Task[None]] = None
        self._logger = logging.getLogger(__name__)

    @property
    def surface(self) -> Optional[MapSurfacePort]:
        """The live surface, or None after teardown."""
        return self._handle.target

    @property
    def banner_message(self) -> Optional[str]:
        """Message to show the user when the screen failed."""
        if self.error is None:
            return None
        return banner_for(self.error)

    def appear(self) -> asyncio.Task[None]:
        """Start the single fetch of this screen on the running loop.

        Calling it again returns the same task; a screen never fetches
        twice.

        Raises:
            RuntimeError: If the screen was torn down.
        """
        if self.state is ScreenState.CLOSED:
            raise RuntimeError("Screen was torn down")
        if self._task is None:
            self._loop = asyncio.get_running_loop()
            self.state = ScreenState.LOADING
            self._logger.info(
                "Screen appeared",
                extra={"origin": self.query.origin, "destination": self.query.destination},
            )
            self._task = self._loop.create_task(self._load())
        return self._task

    async def _load(self) -> None:
        result = await self.fetcher.fetch(self.query)
        self.deliver(result)

    def deliver(self, result: FetchResult) -> None:
        """Apply a fetch result on the loop that owns the surface.

        Safe to call from any thread; results produced off the owning
        loop are marshaled onto it. Only the first result is applied.
        """
        if self._loop is None:
            raise RuntimeError("Screen has not appeared")

        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        if running is self._loop:
            self._apply(result)
        else:
            self._loop.call_soon_threadsafe(self._apply, result)

    def _apply(self, result: FetchResult) -> None:
        if self.state is ScreenState.CLOSED:
            self._logger.debug("Ignoring directions for a closed screen")
            return
        if self.result is not None:
            self._logger.debug("Ignoring duplicate directions result")
            return

        self.result = result
        if not result.is_success:
            self._fail(result.error)  # type: ignore[arg-type]
            return

        try:
            self.renderer.render(result.response, self._handle)  # type: ignore[arg-type]
        except TransitMapError as e:
            self._fail(e)
            return

        self.state = ScreenState.RENDERED

    def _fail(self, error: TransitMapError) -> None:
        self.error = error
        self.state = ScreenState.FAILED
        self._logger.warning(
            "Screen failed",
            extra={"error_type": type(error).__name__, "error": error.message},
        )

    def teardown(self) -> None:
        """Cancel any in-flight fetch and detach from the surface."""
        if self.state is ScreenState.CLOSED:
            return
        self.state = ScreenState.CLOSED
        self._handle.invalidate()
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._logger.info("Screen torn down")
