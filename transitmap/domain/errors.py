"""Typed domain errors for the transit map.

Every failure of a fetch or render pass is surfaced as one of these
values instead of being written to a debug log only.

All errors inherit from TransitMapError and can optionally wrap a root
cause exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class TransitMapError(Exception):
    """Base error for the transit map domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class FetchError(TransitMapError):
    """A directions fetch did not produce a usable response."""


@dataclass
class TransportError(FetchError):
    """Network or HTTP failure talking to the directions service.

    Also raised when the service answers with a non-OK API status such
    as REQUEST_DENIED or OVER_QUERY_LIMIT.

    Attributes:
        status_code: HTTP status code, if a response was received
        api_status: The ``status`` field of the API payload, if any
        url: Endpoint that was called (without query string)
    """

    status_code: Optional[int] = None
    api_status: Optional[str] = None
    url: str = ""


@dataclass
class MalformedResponseError(FetchError):
    """The response body is not the expected directions document.

    Covers invalid JSON, missing or mistyped fields, undecodable
    polylines and malformed line colors.

    Attributes:
        field_path: Dotted path of the offending field, if known
    """

    field_path: str = ""


@dataclass
class MissingRouteError(FetchError):
    """The response holds no usable route.

    Attributes:
        api_status: The ``status`` field of the API payload
    """

    api_status: str = ""


@dataclass
class ConfigurationError(TransitMapError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
        expected_type: Expected type or format
    """

    setting_name: str = ""
    expected_type: Optional[str] = None


@dataclass
class RenderingError(TransitMapError):
    """Map rendering or export failed.

    Attributes:
        output_path: Path where rendering was attempted
        renderer_type: Type of surface that failed
    """

    output_path: Optional[str] = None
    renderer_type: str = ""
