from injector import Injector
from kubernetes.client import ApiClient
from loguru import logger
import kopf

from src.api_key.crd import ConfluentApiKey
from src.api_key.manager import ApiKeyManagement
from src.confluent.errors import ConfluentError
from src.confluent.handlers import as_kopf_error, declared_changes, patch_spec

injector: Injector = None
api: ApiClient = None

COMPUTED_FIELDS = ("id", "key", "secret")

def register_handlers(inj: Injector):
    global injector, api
    injector = inj
    api = inj.get(ApiClient)
    logger.info("Registering ConfluentApiKey handlers...")
    ConfluentApiKey.install(api, exist_ok=True)


@kopf.on.create("ccloud.ops.io", "v1", "ConfluentApiKey")
def create_fn(spec, name, namespace, **kwargs):
    api_key_management = injector.get(ApiKeyManagement)

    if spec.get("id"):
        logger.info(f"ConfluentApiKey {namespace}/{name} already has key {spec['id']}, nothing to create.")
        return {"status": "exists", "id": spec["id"]}

    logger.info(f"Creating ConfluentApiKey resource: {namespace}/{name}")
    try:
        state = api_key_management.create(spec)
    except ConfluentError as e:
        logger.error(f"Failed to create API key for {namespace}/{name}: {e}")
        raise as_kopf_error(e, "create API key") from e

    patch_spec("ConfluentApiKey.ccloud.ops.io", name, namespace, state.as_patch())
    logger.info(f"ConfluentApiKey {namespace}/{name} created successfully.")
    return {"status": "created", "id": state.identity}


@kopf.on.update("ccloud.ops.io", "v1", "ConfluentApiKey")
def update_fn(spec, name, namespace, diff=None, **kwargs):
    api_key_management = injector.get(ApiKeyManagement)

    changed = declared_changes(diff, COMPUTED_FIELDS)
    if not changed:
        return

    logger.info(f"Updating ConfluentApiKey resource: {namespace}/{name}, changed fields: {changed}")
    api_key_management.update(spec.get("id", ""), spec)


@kopf.on.delete("ccloud.ops.io", "v1", "ConfluentApiKey")
def delete_fn(spec, name, namespace, **kwargs):
    api_key_management = injector.get(ApiKeyManagement)

    logger.info(f"Deleting ConfluentApiKey resource: {namespace}/{name}")
    api_key_management.delete(spec.get("id", ""))
