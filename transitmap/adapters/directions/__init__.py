"""Directions adapters - Implementations of DirectionsProviderPort.

Available implementations:
- GoogleDirectionsAdapter: Google Directions web API over httpx
"""

from .google_adapter import GoogleDirectionsAdapter
from .schemas import parse_directions_payload

__all__ = ["GoogleDirectionsAdapter", "parse_directions_payload"]
