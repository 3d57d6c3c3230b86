import kubecrd
from dataclasses import dataclass, field


@dataclass
class KsqlDbCluster(kubecrd.KubeResourceBase):
    __group__ = "ccloud.ops.io"
    __version__ = "v1"

    name: str
    environment_id: str
    kafka_id: str = field(metadata={"description": "Kafka cluster the ksqlDB cluster runs against"})
    kafka_api_key: str = field(metadata={"description": "API key ksqlDB uses to reach the Kafka cluster"})
    kafka_api_secret: str = field(metadata={"description": "Secret of kafka_api_key"})

    # Computed
    id: str = field(default="", metadata={"description": "ksqlDB cluster ID assigned by Confluent Cloud"})
    topic_prefix: str = field(default="")
    endpoint: str = field(default="")
