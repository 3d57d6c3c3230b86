import kubecrd
from dataclasses import dataclass, field


@dataclass
class SchemaRegistryLookup(kubecrd.KubeResourceBase):
    __group__ = "ccloud.ops.io"
    __version__ = "v1"

    environment_id: str

    # Filled by the operator, never by the user.
    id: str = field(default="", metadata={"description": "ID of the schema registry found in the environment"})
    name: str = field(default="")
