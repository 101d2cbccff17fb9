"""Route guide domain exports."""
from .entity import COORD_FACTOR, Feature, Point, Rectangle, RouteNote, RouteSummary
from .repository import FeatureRepository, RouteNoteRepository

__all__ = [
    "COORD_FACTOR",
    "Feature",
    "Point",
    "Rectangle",
    "RouteNote",
    "RouteSummary",
    "FeatureRepository",
    "RouteNoteRepository",
]
