"""ESRI Shapefile feature source.

Reads geometry and DBF attributes with pyshp and reprojects coordinates to
WGS84 with pyproj. Geometry labels follow the multi-geometry convention:
polylines are always ``MultiLineString`` and polygons always
``MultiPolygon``, whatever their part count.
"""
import os
from typing import Any, Dict, Iterator, List, Optional

import shapefile
from pyproj import CRS, Transformer
from pyproj.exceptions import CRSError

from shp_core.exceptions import ProjectionError
from shp_core.models.features import (
    SourceFeature, POINT, MULTI_POINT, MULTI_LINE_STRING, MULTI_POLYGON, NULL
)

TARGET_CRS = CRS.from_epsg(4326)

_POINT_TYPES = (shapefile.POINT, shapefile.POINTM, shapefile.POINTZ)
_MULTIPOINT_TYPES = (shapefile.MULTIPOINT, shapefile.MULTIPOINTM, shapefile.MULTIPOINTZ)
_POLYLINE_TYPES = (shapefile.POLYLINE, shapefile.POLYLINEM, shapefile.POLYLINEZ)
_POLYGON_TYPES = (shapefile.POLYGON, shapefile.POLYGONM, shapefile.POLYGONZ)


def shapefile_base(path: str) -> str:
    """Strip a trailing .shp extension from ``path``."""
    base, ext = os.path.splitext(path)
    return base if ext.lower() == '.shp' else path


def read_source_crs(path: str, source_crs: Optional[str] = None) -> CRS:
    """Determine the shapefile's coordinate reference system.

    Args:
        path: Shapefile path (with or without .shp)
        source_crs: Explicit CRS (EPSG code, WKT, PROJ string); wins over .prj

    Returns:
        pyproj CRS

    Raises:
        ProjectionError: If no CRS is given, no .prj exists, or it can't be parsed
    """
    if source_crs:
        try:
            return CRS.from_user_input(source_crs)
        except CRSError as e:
            raise ProjectionError(f"Invalid source CRS {source_crs!r}: {e}") from e

    prj_path = shapefile_base(path) + '.prj'
    if not os.path.exists(prj_path):
        raise ProjectionError(
            "Could not determine the shapefile's projection. "
            "More than likely, the .prj file was not included."
        )

    with open(prj_path, 'r', encoding='utf-8', errors='replace') as f:
        wkt = f.read().strip()

    try:
        return CRS.from_wkt(wkt)
    except CRSError as e:
        raise ProjectionError(f"Could not parse projection in {prj_path}: {e}") from e


class ShapefileSource:
    """Iterate a shapefile as SourceFeature objects in WGS84.

    Use as a context manager so the underlying pyshp reader is closed on
    every exit path::

        with ShapefileSource('roads.shp') as source:
            for feature in source:
                ...
    """

    def __init__(self, path: str, source_crs: Optional[str] = None,
                 encoding: str = 'utf-8'):
        """Initialize the source.

        Args:
            path: Shapefile path (with or without .shp)
            source_crs: Optional CRS overriding the .prj file
            encoding: DBF text encoding

        Raises:
            FileNotFoundError: If the .shp file does not exist
            ProjectionError: If the source CRS can't be determined
        """
        self.path = path
        shp_path = shapefile_base(path) + '.shp'
        if not os.path.exists(shp_path):
            raise FileNotFoundError(f"Shapefile not found: {shp_path}")
        self.shp_path = shp_path
        self.encoding = encoding
        self.crs = read_source_crs(path, source_crs)

        if self.crs.equals(TARGET_CRS, ignore_axis_order=True):
            self.transformer = None
        else:
            self.transformer = Transformer.from_crs(self.crs, TARGET_CRS, always_xy=True)

        self._reader: Optional[shapefile.Reader] = None

    def open(self) -> 'ShapefileSource':
        if self._reader is None:
            self._reader = shapefile.Reader(self.shp_path, encoding=self.encoding)
        return self

    def close(self) -> None:
        if self._reader is not None:
            self._reader.close()
            self._reader = None

    def __enter__(self) -> 'ShapefileSource':
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def field_names(self) -> List[str]:
        """DBF field names in file order (deletion flag excluded)."""
        self.open()
        return [f[0] for f in self._reader.fields[1:]]

    def __len__(self) -> int:
        self.open()
        return len(self._reader)

    def __iter__(self) -> Iterator[SourceFeature]:
        self.open()
        names = self.field_names
        for index, shape_record in enumerate(self._reader.iterShapeRecords()):
            attributes: Dict[str, Any] = dict(zip(names, shape_record.record))
            geometry_type, parts = self._read_geometry(shape_record.shape)
            yield SourceFeature(
                geometry_type=geometry_type,
                parts=parts,
                attributes=attributes,
                feature_id=index,
            )

    def _read_geometry(self, shape) -> tuple:
        """Map a pyshp shape to a (geometry label, parts) pair."""
        shape_type = shape.shapeType
        if shape_type == shapefile.NULL or not shape.points:
            return NULL, []

        if shape_type in _POINT_TYPES:
            return POINT, self._transform(shape.points[:1])

        if shape_type in _MULTIPOINT_TYPES:
            return MULTI_POINT, self._transform(shape.points)

        geometry = shape.__geo_interface__

        if shape_type in _POLYLINE_TYPES:
            if geometry['type'] == 'LineString':
                lines = [geometry['coordinates']]
            else:
                lines = geometry['coordinates']
            return MULTI_LINE_STRING, [self._transform(line) for line in lines]

        if shape_type in _POLYGON_TYPES:
            if geometry['type'] == 'Polygon':
                polygons = [geometry['coordinates']]
            else:
                polygons = geometry['coordinates']
            return MULTI_POLYGON, [
                [self._transform(ring) for ring in polygon] for polygon in polygons
            ]

        return shapefile.SHAPETYPE_LOOKUP.get(shape_type, str(shape_type)), []

    def _transform(self, coords) -> List[tuple]:
        """Reproject (x, y) pairs to WGS84 (lon, lat)."""
        points = [(c[0], c[1]) for c in coords]
        if self.transformer is None:
            return points
        return list(self.transformer.itransform(points))
