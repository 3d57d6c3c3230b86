from typing import Any, Mapping

from injector import inject, singleton
from loguru import logger

from src.confluent.client import ConfluentClient
from src.confluent.errors import ImportFormatError, NotFoundError, TransportError
from src.confluent.lifecycle import Completeness, LifecycleHandler, ResourceState
from src.schema_registry.codec import SchemaRegistryCodec


@singleton
class SchemaRegistryManagement(LifecycleHandler):
    """Schema registries are created, refreshed and imported, never updated nor deleted."""
    kind = "SchemaRegistry"
    completeness = Completeness.CREATE_ONLY

    @inject
    def __init__(self, client: ConfluentClient):
        super().__init__(client, SchemaRegistryCodec())

    def create(self, spec: Mapping[str, Any]) -> ResourceState:
        environment_id = spec["environment_id"]
        logger.info(f"Creating schema registry in {environment_id} ({spec['service_provider']}/{spec['location']})")

        raw = self.client.request(
            "POST",
            self.codec.create_path(),
            params=self.codec.account_params(environment_id),
            body=self.codec.encode(spec),
        )
        state = self.codec.decode(raw)

        logger.info(f"Created schema registry {state.identity} in {environment_id}")
        return state

    def read(self, identity: str, spec: Mapping[str, Any]) -> ResourceState:
        logger.debug(f"Refreshing schema registry {identity}")
        try:
            raw = self.client.request(
                "GET",
                self.codec.item_path(identity),
                params=self.codec.account_params(spec["environment_id"]),
            )
        except TransportError as e:
            if e.status_code == 404:
                raise NotFoundError(f"Schema registry {identity} not found in {spec['environment_id']}") from e
            raise

        return self.codec.decode(raw)

    def import_(self, external_id: str) -> ResourceState:
        parts = external_id.split("/")
        if len(parts) != 2 or not all(parts):
            raise ImportFormatError(
                f"invalid format for schema registry import '{external_id}': "
                f"expected '<environment ID>/<schema registry cluster ID>'"
            )

        environment_id, cluster_id = parts
        logger.info(f"Schema Registry import for {cluster_id} in {environment_id}")
        return ResourceState(identity=cluster_id, attributes={"environment_id": environment_id})
