"""Google Directions web API adapter.

Issues a single GET to the directions endpoint with URL-encoded
parameters and converts every failure into a typed error:
- network errors and non-2xx answers -> TransportError
- non-JSON bodies and schema violations -> MalformedResponseError
- ZERO_RESULTS / empty routes -> MissingRouteError

No retry and no request deduplication: a screen issues one fetch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

import httpx

from ...config import DirectionsConfig, get_config
from ...domain.errors import MalformedResponseError, TransportError
from ...domain.models import DirectionsQuery, DirectionsResponse
from .schemas import parse_directions_payload


@dataclass
class GoogleDirectionsAdapter:
    """Directions provider backed by the Google Directions web API.

    This adapter implements DirectionsProviderPort with httpx.

    Attributes:
        config: Directions configuration (API key, endpoint, timeout)
        transport: Optional httpx transport, used to stub the endpoint
    """

    config: DirectionsConfig = field(default_factory=lambda: get_config().directions)
    transport: Optional[httpx.AsyncBaseTransport] = field(default=None, repr=False)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def _build_params(self, query: DirectionsQuery) -> dict[str, str]:
        params = query.to_params(self.config.require_api_key())
        if self.config.language:
            params["language"] = self.config.language
        return params

    async def get_directions(self, query: DirectionsQuery) -> DirectionsResponse:
        """Fetch and parse directions for a query.

        Args:
            query: Origin, destination, mode and alternatives flag.

        Returns:
            The parsed directions response.

        Raises:
            ConfigurationError: If no API key is configured.
            TransportError: On network failure, non-2xx status or non-OK API status.
            MalformedResponseError: If the body is not a directions document.
            MissingRouteError: If the service found no route.
        """
        params = self._build_params(query)
        url = self.config.base_url

        self._logger.info(
            "Requesting directions",
            extra={
                "origin": query.origin,
                "destination": query.destination,
                "mode": query.mode.api_value,
                "alternatives": query.alternatives,
            },
        )

        try:
            async with httpx.AsyncClient(
                timeout=self.config.timeout_seconds,
                transport=self.transport,
            ) as client:
                response = await client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            self._logger.warning(
                "Directions request rejected",
                extra={"status_code": e.response.status_code},
            )
            raise TransportError(
                f"Directions request failed with HTTP {e.response.status_code}",
                status_code=e.response.status_code,
                url=url,
                cause=e,
            )
        except httpx.HTTPError as e:
            self._logger.warning(
                "Directions request failed",
                extra={"error": type(e).__name__},
            )
            raise TransportError(
                "Directions request failed",
                url=url,
                cause=e,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise MalformedResponseError(
                "Directions response is not valid JSON",
                cause=e,
            )

        self._logger.debug(
            "Directions payload received",
            extra={"bytes": len(response.content)},
        )

        directions = parse_directions_payload(payload, url=url)

        self._logger.info(
            "Directions parsed",
            extra={
                "routes": len(directions.routes),
                "steps": len(directions.primary_route.steps),
            },
        )
        return directions
