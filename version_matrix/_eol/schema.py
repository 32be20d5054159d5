"""JSON schema validation for the endoflife.date feed.

Only the fields the resolver depends on are constrained: the payload must be
a non-empty array of objects, each with a non-empty string `cycle`. The
polymorphic `eol` and `support` fields must be a date string, a boolean or
null when present. Anything else the feed adds is tolerated.
"""

from typing import Any, Dict, Optional

import jsonschema

from ..exceptions import CatalogError

_LIFECYCLE_VALUE: Dict[str, Any] = {"type": ["string", "boolean", "null"]}

FEED_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "endoflife.date product release cycles",
    "type": "array",
    "minItems": 1,
    "items": {
        "type": "object",
        "required": ["cycle"],
        "properties": {
            "cycle": {"type": "string", "minLength": 1},
            "releaseDate": {"type": ["string", "null"]},
            "eol": _LIFECYCLE_VALUE,
            "support": _LIFECYCLE_VALUE,
            "latest": {"type": ["string", "null"]},
            "latestReleaseDate": {"type": ["string", "null"]},
            "lts": {"type": ["boolean", "string", "null"]},
        },
    },
}


def _format_error(error: jsonschema.ValidationError) -> str:
    path: Optional[str] = ".".join(str(p) for p in error.absolute_path) if error.absolute_path else None
    if path:
        return f"{error.message} (at {path})"
    return error.message


def validate_feed(data: Any) -> None:
    """
    Validate a decoded feed payload.

    Args:
        data: Parsed JSON returned by the feed

    Raises:
        CatalogError: If the payload does not match FEED_SCHEMA
    """
    # Clearer message than "[] should be non-empty"
    if isinstance(data, list) and not data:
        raise CatalogError("received empty data array")

    try:
        jsonschema.validate(instance=data, schema=FEED_SCHEMA)
    except jsonschema.ValidationError as e:
        raise CatalogError(f"EOL feed failed schema validation: {_format_error(e)}") from e
