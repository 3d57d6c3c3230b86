from typing import Any, Mapping

from injector import inject, singleton
from loguru import logger

from src.confluent.client import ConfluentClient
from src.confluent.lifecycle import Completeness, LifecycleHandler, ResourceState
from src.ksqldb_cluster.codec import KsqlDbClusterCodec


@singleton
class KsqlDbClusterManagement(LifecycleHandler):
    kind = "KsqlDbCluster"
    completeness = Completeness.CREATE_ONLY

    @inject
    def __init__(self, client: ConfluentClient):
        super().__init__(client, KsqlDbClusterCodec())

    def create(self, spec: Mapping[str, Any]) -> ResourceState:
        environment_id = spec["environment_id"]
        logger.info(f"Creating ksqlDB cluster {spec['name']} on Kafka cluster {spec['kafka_id']} in {environment_id}")

        raw = self.client.request(
            "POST",
            self.codec.create_path(),
            params=self.codec.account_params(environment_id),
            body=self.codec.encode(spec),
        )
        state = self.codec.decode(raw)

        logger.info(f"Created ksqlDB cluster {state.identity} ({state.attributes['name']})")
        return state
