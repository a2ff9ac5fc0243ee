"""Utility functions for shapefile to OSM conversion."""

from shp_core.utils.xml_utils import xml_escape

__all__ = ['xml_escape']
