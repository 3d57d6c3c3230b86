from typing import Any, Dict, Mapping

from src.confluent.codec import ResourceCodec
from src.confluent.errors import DecodeError
from src.confluent.lifecycle import ResourceState


class ApiKeyCodec(ResourceCodec):
    """
    Response sample:

        "api_key": {
            "account_id": "env-18vqv",
            "key": "AB3CDEFG4HIJKLMN",
            "secret": "...",
            "logical_clusters": [{"id": "lkc-415jz", "type": "kafka"}],
            "user_resource_id": "sa-gq8no3",
            ...
        },
        "error": null
    """
    collection = "/api_keys"

    def encode(self, spec: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "apiKey": {
                "accountId": spec["environment_id"],
                "description": spec.get("description", ""),
                "logicalClusters": [
                    {"id": spec["resource_id"], "type": spec.get("resource_type", "")}
                ],
                "userId": 0,
                "userResourceId": spec["owner_id"],
            }
        }

    def decode(self, raw: str) -> ResourceState:
        api_key = self.envelope(raw).get_object("api_key")

        key = api_key.get("key")
        if not key:
            raise DecodeError("API response carries no api key")

        return ResourceState(
            identity=key,
            attributes={"key": key, "secret": api_key.get("secret") or ""},
        )
