import kubecrd
from dataclasses import dataclass, field


@dataclass
class SchemaRegistry(kubecrd.KubeResourceBase):
    __group__ = "ccloud.ops.io"
    __version__ = "v1"

    environment_id: str
    kafka_cluster_id: str
    service_provider: str = field(metadata={"description": "Cloud provider hosting the registry, e.g. aws"})
    location: str = field(metadata={"description": "Cloud region, e.g. us-east-2"})

    import_id: str = field(default="", metadata={"description": "Adopt an existing registry, format '<environment-id>/<cluster-id>'"})

    # Computed
    id: str = field(default="", metadata={"description": "Schema registry cluster ID, e.g. lsrc-o338zj"})
    name: str = field(default="")
    endpoint: str = field(default="")
    drift_message: str = field(default="", metadata={"description": "Set when the registry disappeared from Confluent Cloud, the resource then needs to be re-applied"})
