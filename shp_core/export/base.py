"""Base class for output sinks.

A sink receives accepted primitives from the converter in emission order,
assigns them identities and serializes them. Sinks are context managers:
``start`` runs on enter and ``finish`` on every exit path.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict

from shp_core.models.elements import Node, Relation, Way


class BaseSink(ABC):
    """Abstract base class for output sinks."""

    def start(self) -> None:
        """Prepare the sink for output."""

    def finish(self) -> None:
        """Flush and release any resources held by the sink."""

    @abstractmethod
    def add_node(self, node: Node) -> None:
        """Emit a standalone node."""
        pass

    @abstractmethod
    def add_way(self, way: Way) -> None:
        """Emit a way (and the nodes it references)."""
        pass

    @abstractmethod
    def add_relation(self, relation: Relation) -> None:
        """Emit a relation (and the members it references)."""
        pass

    @abstractmethod
    def get_format_name(self) -> str:
        """Get the format name (e.g., 'osm', 'memory').

        Returns:
            Format name string
        """
        pass

    def build_metadata(self) -> Dict[str, Any]:
        """Describe what the sink has written so far."""
        return {'format': self.get_format_name()}

    def __enter__(self) -> 'BaseSink':
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.finish()
