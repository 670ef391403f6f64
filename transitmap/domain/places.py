"""Known places used by the demo screen.

Identifiers use the ``place_id:`` prefix accepted by the directions API.
See https://developers.google.com/maps/documentation/places/web-service/place-id
"""

from __future__ import annotations

from enum import Enum

from .models import DirectionsQuery, TravelMode


class KnownPlace(Enum):
    """Places around Brooklyn and Midtown Manhattan."""

    MEDGAR_EVERS_COLLEGE = "place_id:ChIJzVCft3ZbwokRlCL7B6LA8U4"
    TIMES_SQUARE = "place_id:ChIJmQJIxlVYwokRLgeuocVOGVU"
    BARCLAYS_CENTER = "place_id:ChIJo3lEaa5bwokRnuZS2oWTlLk"

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").title()

    @classmethod
    def from_label(cls, label: str) -> KnownPlace:
        for place in cls:
            if place.label == label:
                return place
        raise KeyError(f"Unknown place: {label!r}")


def default_query() -> DirectionsQuery:
    """Transit directions from Medgar Evers College to Times Square."""
    return DirectionsQuery(
        origin=KnownPlace.MEDGAR_EVERS_COLLEGE.value,
        destination=KnownPlace.TIMES_SQUARE.value,
        mode=TravelMode.TRANSIT,
        alternatives=True,
    )
