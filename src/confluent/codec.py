from typing import Any, Dict, Mapping

from src.confluent.envelope import Envelope
from src.confluent.errors import DecodeError


class ResourceCodec:
    """Maps the declared fields of one resource kind to wire JSON and back.

    Subclasses set `collection` and implement `encode` / `decode`. The same
    codec instance is used by every lifecycle operation of the kind.
    """
    collection: str = ""

    def account_params(self, environment_id: str) -> Dict[str, str]:
        return {"account_id": environment_id}

    def create_path(self) -> str:
        return self.collection

    def item_path(self, identity: str) -> str:
        return f"{self.collection}/{identity}"

    def envelope(self, raw: str) -> Envelope:
        envelope = Envelope.parse(raw)
        envelope.raise_for_error()
        return envelope

    def encode(self, spec: Mapping[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError

    def decode(self, raw: str):
        raise NotImplementedError

    @staticmethod
    def require_id(obj: Dict[str, Any], what: str) -> str:
        if not isinstance(obj, dict):
            raise DecodeError(f"Expected {what} to be an object, got {type(obj).__name__}")
        identity = obj.get("id")
        if identity in (None, ""):
            raise DecodeError(f"API response carries no {what} id")
        return str(identity)
