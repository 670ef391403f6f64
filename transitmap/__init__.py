"""Top-level package for the transit directions map.

This package fetches transit directions from the Google Directions web
API and draws the first route onto a map surface: one styled path and a
pair of markers per step, plus a viewport fit to the route bounds.
"""
