"""Directions port - Abstraction for the directions web service.

This protocol defines the contract for directions providers, allowing
the Google web API to be swapped for a stub in tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..domain.models import DirectionsQuery, DirectionsResponse


class DirectionsProviderPort(Protocol):
    """Port for directions providers.

    Implementation: adapters/directions/google_adapter.py
    """

    async def get_directions(self, query: DirectionsQuery) -> DirectionsResponse:
        """Fetch and parse directions for a query.

        Args:
            query: Origin, destination, mode and alternatives flag.

        Returns:
            The parsed directions response, with at least one route.

        Raises:
            TransportError: Network, HTTP or API status failure.
            MalformedResponseError: Body is not the expected document.
            MissingRouteError: The service found no route.
            ConfigurationError: No API key is configured.
        """
        ...
