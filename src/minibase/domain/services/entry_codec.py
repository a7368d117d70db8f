"""Codec between JSON values and the text column used by the store."""

import json
from typing import Any

from minibase.domain.exceptions import CodecError, ValidationError


def encode(value: Any) -> str:
    """Serialize a JSON value for storage.

    Non-ASCII text is stored as-is rather than escaped.

    Raises:
        ValidationError: If the value has no JSON form, e.g. NaN or Infinity.
    """
    try:
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"), allow_nan=False)
    except ValueError as e:
        raise ValidationError(f"Value is not representable as JSON: {e}") from e


def decode(stored: str | bytes) -> Any:
    """Deserialize a stored column value.

    Raises:
        CodecError: If the stored text is not valid JSON.
    """
    if isinstance(stored, (bytes, bytearray)):
        try:
            stored = stored.decode("utf-8")
        except UnicodeDecodeError as e:
            raise CodecError(f"Stored entry is not valid UTF-8: {e}") from e

    try:
        return json.loads(stored)
    except (json.JSONDecodeError, TypeError) as e:
        raise CodecError(f"Stored entry is not valid JSON: {e}") from e
