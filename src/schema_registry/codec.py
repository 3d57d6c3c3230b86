from typing import Any, Dict, List, Mapping

from src.confluent.codec import ResourceCodec
from src.confluent.errors import DecodeError
from src.confluent.lifecycle import ResourceState

# Confluent Cloud allows a single schema registry per environment, it is always named this way.
REGISTRY_NAME = "account schema-registry"


class SchemaRegistryCodec(ResourceCodec):
    """
    Cluster sample:

        "account_id": "env-18vqv",
        "created": "2022-03-28T00:35:19.860568Z",
        "endpoint": "https://psrc-1wydj.us-east-2.aws.confluent.cloud",
        "id": "lsrc-o338zj",
        "kafka_cluster_id": "lkc-415jz",
        "max_schemas": 1000,
        "name": "account schema-registry",
        "physical_cluster_id": "psrc-1wydj",
        "status": "UP"
    """
    collection = "/schema_registries"

    def encode(self, spec: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "config": {
                "accountId": spec["environment_id"],
                "location": spec["location"],
                "name": REGISTRY_NAME,
                "serviceProvider": spec["service_provider"],
            }
        }

    def state_of(self, cluster: Dict[str, Any]) -> ResourceState:
        # endpoint is not taken from the response yet.
        return ResourceState(
            identity=self.require_id(cluster, "schema registry"),
            attributes={"name": cluster.get("name") or ""},
        )

    def decode(self, raw: str) -> ResourceState:
        return self.state_of(self.envelope(raw).get_object("cluster"))

    def decode_list(self, raw: str) -> List[ResourceState]:
        clusters = self.envelope(raw).get("clusters")
        if clusters is None:
            return []
        if not isinstance(clusters, list):
            raise DecodeError(f"Expected 'clusters' to be a list, got {type(clusters).__name__}")

        return [self.state_of(cluster) for cluster in clusters]
