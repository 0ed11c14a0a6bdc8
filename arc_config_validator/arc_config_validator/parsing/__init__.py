"""Manifest discovery, decoding and source locations."""

from .source_location import build_source_maps, join_path
from .yaml_loader import YamlLoader, decode_embedded, decode_yaml

__all__ = [
    "YamlLoader",
    "build_source_maps",
    "decode_embedded",
    "decode_yaml",
    "join_path",
]
