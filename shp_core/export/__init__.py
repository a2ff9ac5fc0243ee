"""Output sinks for converted primitives."""

from shp_core.export.base import BaseSink
from shp_core.export.memory_sink import CollectingSink
from shp_core.export.xml_exporter import OSMXMLWriter

__all__ = ['BaseSink', 'CollectingSink', 'OSMXMLWriter']
