import kubecrd
from dataclasses import dataclass, field

@dataclass
class ConfluentApiKey(kubecrd.KubeResourceBase):
    __group__ = 'ccloud.ops.io'
    __version__ = 'v1'

    # All inputs require replacement, the key cannot be changed in place.
    environment_id: str
    owner_id: str = field(metadata={"description": "Service account the key is issued for, e.g. sa-gq8no3."})
    resource_id: str = field(metadata={"description": "Logical cluster the key grants access to, e.g. lkc-415jz."})
    description: str = field(default="")
    owner_email: str = field(default="")
    resource_type: str = field(default="")

    id: str = field(default="", metadata={"description": "Identity assigned by Confluent Cloud (same as key)."})
    key: str = field(default="", metadata={"description": "The generated API key."})
    secret: str = field(default="", metadata={"description": "The generated API secret."})
