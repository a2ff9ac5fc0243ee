"""Attribute to tag mapping."""

from shp_core.mapping.tag_mapper import normalize_value, apply_rules

__all__ = ['normalize_value', 'apply_rules']
