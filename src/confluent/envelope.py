import json
from dataclasses import dataclass, field
from typing import Any, Dict

from src.confluent.errors import DecodeError, LogicalApiError


def _get(obj: Dict[str, Any], key: str, default=None):
    """Case-insensitive key lookup, the API has answered with both `Error` and `error`."""
    if key in obj:
        return obj[key]
    wanted = key.lower()
    for k, v in obj.items():
        if k.lower() == wanted:
            return v
    return default


def _as_text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value)


@dataclass
class Envelope:
    """Outer shape of every Confluent Cloud response."""
    payload: Dict[str, Any] = field(default_factory=dict)
    error: str = ""
    validation_errors: str = ""
    raw: str = ""

    @classmethod
    def parse(cls, raw: str) -> "Envelope":
        try:
            data = json.loads(raw)
        except ValueError as e:
            raise DecodeError(f"Failed to decode API response: {e}") from e

        if not isinstance(data, dict):
            raise DecodeError(f"Expected a JSON object in API response, got {type(data).__name__}")

        return cls(
            payload=data,
            error=_as_text(_get(data, "error")),
            validation_errors=_as_text(_get(data, "validationErrors")),
            raw=raw,
        )

    def raise_for_error(self):
        if self.error != "":
            raise LogicalApiError(self.error, body=self.raw, validation_errors=self.validation_errors)

    def get(self, key: str, default=None):
        return _get(self.payload, key, default)

    def get_object(self, key: str) -> Dict[str, Any]:
        value = self.get(key)
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise DecodeError(f"Expected '{key}' to be an object, got {type(value).__name__}")
        return value
