from collections.abc import Hashable
from dataclasses import dataclass


# Core geometry types shared by the spatial index and the street graph
@dataclass(frozen=True)
class Point:
    x: float  # longitude for street data
    y: float  # latitude for street data


@dataclass(frozen=True)
class WeightedEdge:
    source: Hashable
    target: Hashable
    weight: float
    way: str | None = None


@dataclass(frozen=True)
class Node:
    id: int
    lon: float
    lat: float
    name: str | None = None

    @property
    def point(self) -> Point:
        return Point(self.lon, self.lat)


@dataclass(frozen=True)
class Location:
    """A named place as returned by name lookups."""

    id: int
    lon: float
    lat: float
    name: str
