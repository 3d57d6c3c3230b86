from injector import inject, singleton
from loguru import logger

from src.confluent.client import ConfluentClient
from src.confluent.errors import NotFoundError
from src.confluent.lifecycle import ResourceState
from src.schema_registry.codec import SchemaRegistryCodec


@singleton
class SchemaRegistryLookupManagement:
    """Read-only reference to the schema registry of an environment."""

    @inject
    def __init__(self, client: ConfluentClient):
        self.client = client
        self.codec = SchemaRegistryCodec()

    def lookup(self, environment_id: str) -> ResourceState:
        raw = self.client.request(
            "GET",
            self.codec.collection,
            params=self.codec.account_params(environment_id),
        )
        registries = self.codec.decode_list(raw)

        if not registries:
            raise NotFoundError(f"No schema registry found in environment {environment_id}")

        if len(registries) > 1:
            logger.warning(
                f"Found {len(registries)} schema registries in {environment_id}: "
                f"{[r.identity for r in registries]}, using the first one"
            )

        registry = registries[0]
        logger.info(f"Found schema registry {registry.identity} in {environment_id}")
        return registry
