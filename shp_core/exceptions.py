"""Exception types raised by the conversion engine and its collaborators."""
from typing import Optional


class ShpToOsmError(Exception):
    """Base class for all shp2osm failures."""


class GeometryError(ShpToOsmError):
    """Geometry that cannot be decomposed into OSM primitives.

    Raised for rings with fewer than two coordinates and polygons without
    any ring. Not recoverable per feature: the converter re-raises it with
    the offending feature index attached and the run is aborted.
    """

    def __init__(self, message: str, feature_id: Optional[int] = None):
        super().__init__(message)
        self.feature_id = feature_id

    def __str__(self) -> str:
        message = super().__str__()
        if self.feature_id is not None:
            return f"feature {self.feature_id}: {message}"
        return message


class ProjectionError(ShpToOsmError):
    """Source coordinate reference system is missing or unusable."""


class RuleFileError(ShpToOsmError):
    """Rules file could not be read as text."""
