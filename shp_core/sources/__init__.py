"""Feature sources yielding SourceFeature objects."""

from shp_core.sources.shapefile_source import ShapefileSource, read_source_crs, TARGET_CRS

__all__ = ['ShapefileSource', 'read_source_crs', 'TARGET_CRS']
