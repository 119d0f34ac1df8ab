"""
Path resolution over arbitrary object graphs.
"""

from .field_source import AttributeFieldSource, FieldInfo, FieldSource
from .path_resolver import PathResolver

__all__ = [
    "AttributeFieldSource",
    "FieldInfo",
    "FieldSource",
    "PathResolver",
]
