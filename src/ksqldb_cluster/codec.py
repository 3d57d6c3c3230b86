from typing import Any, Dict, Mapping

from src.confluent.codec import ResourceCodec
from src.confluent.lifecycle import ResourceState

# Confluent streaming units provisioned for every cluster.
TOTAL_NUM_CSU = 4


class KsqlDbClusterCodec(ResourceCodec):
    collection = "/ksqls"

    def encode(self, spec: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "config": {
                "accountId": spec["environment_id"],
                "kafkaApiKey": {
                    "key": spec["kafka_api_key"],
                    "secret": spec["kafka_api_secret"],
                },
                "kafkaClusterId": spec["kafka_id"],
                "name": spec["name"],
                "totalNumCsu": TOTAL_NUM_CSU,
            }
        }

    def decode(self, raw: str) -> ResourceState:
        cluster = self.envelope(raw).get_object("cluster")

        # topic_prefix and endpoint are not taken from the response yet.
        return ResourceState(
            identity=self.require_id(cluster, "ksqlDB cluster"),
            attributes={"name": cluster.get("name") or ""},
        )
