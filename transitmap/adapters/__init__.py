"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the application to external systems like:
- The Google Directions web API (httpx)
- Map surfaces (Folium HTML maps, in-memory recording)
"""
