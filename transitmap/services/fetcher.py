"""Directions fetcher - turns provider calls into a typed result union."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..domain.errors import TransitMapError
from ..domain.models import DirectionsQuery, FetchResult
from ..ports.directions import DirectionsProviderPort


@dataclass
class DirectionsFetcher:
    """Fetch directions and report exactly one success or failure.

    Typed errors raised by the provider (transport, malformed response,
    missing route, configuration) are returned as failure results and
    logged; they never escape ``fetch``. Cancellation propagates so the
    owning screen can abandon an in-flight request.

    Attributes:
        provider: The directions provider to call
    """

    provider: DirectionsProviderPort

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    async def fetch(self, query: DirectionsQuery) -> FetchResult:
        """Fetch directions for a query.

        Args:
            query: The directions query.

        Returns:
            FetchResult holding either the response or the typed error.
        """
        try:
            response = await self.provider.get_directions(query)
        except TransitMapError as e:
            self._logger.warning(
                "Directions fetch failed",
                extra={
                    "error_type": type(e).__name__,
                    "error": e.message,
                    "origin": query.origin,
                    "destination": query.destination,
                },
            )
            return FetchResult.failure(e)

        self._logger.info(
            "Directions fetched",
            extra={"routes": len(response.routes)},
        )
        return FetchResult.success(response)
