"""Encoders package."""

from feedjson.encoders.json_encoder import (
    DEFAULT_CALLBACK,
    encode_json,
    force_objects,
    render_output,
    sanitize_callback,
    wrap_jsonp,
)

__all__ = [
    "DEFAULT_CALLBACK",
    "encode_json",
    "force_objects",
    "render_output",
    "sanitize_callback",
    "wrap_jsonp",
]
