from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping

from loguru import logger

from src.confluent.client import ConfluentClient
from src.confluent.codec import ResourceCodec
from src.confluent.errors import ImportFormatError


class Completeness(Enum):
    FULLY_RECONCILING = "fully-reconciling"
    # Only Create reaches the API; Update and Delete never touch the remote object.
    CREATE_ONLY = "create-only"


@dataclass
class ResourceState:
    identity: str = ""
    attributes: Dict[str, Any] = field(default_factory=dict)

    def as_patch(self) -> Dict[str, Any]:
        return {"id": self.identity, **self.attributes}


class LifecycleHandler:
    """Create/Read/Update/Delete/Import for one resource kind."""
    kind: str = ""
    completeness: Completeness = Completeness.CREATE_ONLY

    def __init__(self, client: ConfluentClient, codec: ResourceCodec):
        self.client = client
        self.codec = codec

    def create(self, spec: Mapping[str, Any]) -> ResourceState:
        raise NotImplementedError

    def read(self, identity: str, spec: Mapping[str, Any]) -> ResourceState:
        self._skipped("read", identity)
        return ResourceState(identity=identity)

    def update(self, identity: str, spec: Mapping[str, Any]) -> ResourceState:
        self._skipped("update", identity)
        return ResourceState(identity=identity)

    def delete(self, identity: str) -> None:
        self._skipped("delete", identity)

    def import_(self, external_id: str) -> ResourceState:
        raise ImportFormatError(f"{self.kind} does not support import (got '{external_id}')")

    def _skipped(self, operation: str, identity: str):
        if self.completeness is Completeness.FULLY_RECONCILING:
            raise NotImplementedError(f"{self.kind} must implement {operation}")
        logger.warning(
            f"{self.kind} is {self.completeness.value}: {operation} of '{identity}' "
            f"is not applied to Confluent Cloud"
        )
