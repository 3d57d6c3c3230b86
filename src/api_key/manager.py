from typing import Any, Mapping

from injector import inject, singleton
from loguru import logger

from src.api_key.codec import ApiKeyCodec
from src.confluent.client import ConfluentClient
from src.confluent.lifecycle import Completeness, LifecycleHandler, ResourceState


@singleton
class ApiKeyManagement(LifecycleHandler):
    kind = "ConfluentApiKey"
    completeness = Completeness.CREATE_ONLY

    @inject
    def __init__(self, client: ConfluentClient):
        super().__init__(client, ApiKeyCodec())

    def create(self, spec: Mapping[str, Any]) -> ResourceState:
        environment_id = spec["environment_id"]
        logger.info(f"Creating API key for {spec['resource_id']} owned by {spec['owner_id']} in {environment_id}")

        raw = self.client.request(
            "POST",
            self.codec.create_path(),
            params=self.codec.account_params(environment_id),
            body=self.codec.encode(spec),
        )
        state = self.codec.decode(raw)

        logger.info(f"Created API key {state.identity} in {environment_id}")
        return state
