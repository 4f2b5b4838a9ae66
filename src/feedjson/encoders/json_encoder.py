"""JSON and JSONP output encoding."""

import json
import re
from typing import Any

from feedjson.exceptions import ConfigurationError

DEFAULT_CALLBACK = "processResponse"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_$.]")
_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def force_objects(value: Any) -> Any:
    """Recursively turn lists into objects keyed by stringified index.

    Mirrors the "force object" mode of other JSON encoders: an empty list
    becomes ``{}`` and ``["a", "b"]`` becomes ``{"0": "a", "1": "b"}``.
    """
    if isinstance(value, (list, tuple)):
        return {str(index): force_objects(item) for index, item in enumerate(value)}
    if isinstance(value, dict):
        return {key: force_objects(item) for key, item in value.items()}
    return value


def encode_json(data: Any, force_object: bool = False) -> str:
    """Serialize parsed feed data to JSON text.

    Args:
        data: Parsed feed structure.
        force_object: Emit every list as an object, so empty lists
            serialize as ``{}``.

    Returns:
        JSON string; non-ASCII characters are kept as-is.
    """
    if force_object:
        data = force_objects(data)
    return json.dumps(data, ensure_ascii=False)


def sanitize_callback(callback: str | None, default: str = DEFAULT_CALLBACK) -> str:
    """Reduce a caller-supplied JSONP callback name to a safe identifier.

    Only dotted JavaScript identifiers survive (``app.handlers.onFeed``).
    Characters outside ``[A-Za-z0-9_$.]`` are removed, as are segments that
    end up empty or start with a digit.

    Raises:
        ConfigurationError: When nothing usable is left.
    """
    if callback is None or not callback.strip():
        return default

    cleaned = _UNSAFE_CHARS.sub("", callback)
    segments = [segment.lstrip("0123456789") for segment in cleaned.split(".")]
    segments = [segment for segment in segments if _IDENTIFIER.match(segment)]
    if not segments:
        raise ConfigurationError(f"Invalid callback name: {callback!r}")
    return ".".join(segments)


def wrap_jsonp(json_text: str, callback: str) -> str:
    """Wrap JSON text in a callback invocation: ``callback(json);``."""
    return f"{callback}({json_text});"


def render_output(
    data: Any,
    callback: str | None = None,
    jsonp: bool = False,
    force_object: bool = True,
    default_callback: str = DEFAULT_CALLBACK,
) -> str:
    """Produce the final response body.

    Args:
        data: Parsed feed structure.
        callback: Requested callback name; implies ``jsonp``.
        jsonp: Wrap the JSON even when no callback was given.
        force_object: See ``encode_json``.
        default_callback: Callback used when none is supplied.

    Returns:
        JSON or JSONP text.
    """
    json_text = encode_json(data, force_object=force_object)
    if not jsonp and callback is None:
        return json_text
    return wrap_jsonp(json_text, sanitize_callback(callback, default=default_callback))
